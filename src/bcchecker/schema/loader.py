"""Resolve a schema source given on the command line.

Two forms are accepted:

- a path to an SDL file, e.g. ``schema.graphql``
- ``package.module:attribute`` naming a ``GraphQLSchema`` (or an SDL string)
  importable from the current working directory; the directory is put on
  ``sys.path`` for the duration of the import only
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

from graphql import GraphQLSchema

from bcchecker.core.errors import SchemaLoadError
from bcchecker.core.settings import get_logger

logger = get_logger(__name__)


def _resolve(module_name: str, attr: str) -> object:
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise SchemaLoadError(f"cannot import {module_name!r}: {exc}") from exc

    obj: object = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise SchemaLoadError(f"{module_name!r} has no attribute {attr!r}") from exc
    if callable(obj) and not isinstance(obj, GraphQLSchema):
        obj = obj()
    return obj


def _load_object(source: str) -> GraphQLSchema | str:
    module_name, _, attr = source.partition(":")
    if not module_name or not attr:
        raise SchemaLoadError(f"expected 'package.module:attribute', got {source!r}")

    # cwd is importable only while the object is being resolved
    cwd = str(Path.cwd())
    added = cwd not in sys.path
    if added:
        sys.path.insert(0, cwd)
    try:
        obj = _resolve(module_name, attr)
    finally:
        if added:
            sys.path.remove(cwd)
    if not isinstance(obj, GraphQLSchema | str):
        raise SchemaLoadError(
            f"{source!r} resolved to {type(obj).__name__}, expected GraphQLSchema or SDL text"
        )
    return obj


def load_schema(source: str | Path) -> GraphQLSchema | str:
    """Return the schema named by ``source`` (SDL text for files)."""
    path = Path(source)
    if path.is_file():
        logger.debug("Loading schema SDL from %s", path)
        return path.read_text(encoding="utf-8")
    if isinstance(source, str) and ":" in source:
        logger.debug("Importing schema object %s", source)
        return _load_object(source)
    raise SchemaLoadError(f"schema source {str(source)!r} is neither a file nor 'module:attr'")


__all__ = ["load_schema"]
