"""Schema library adapters (graphql-core) and schema source loading."""

from __future__ import annotations

from .adapter import GraphQLSchemaAdapter, SchemaAdapter
from .loader import load_schema

__all__ = ["GraphQLSchemaAdapter", "SchemaAdapter", "load_schema"]
