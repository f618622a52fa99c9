"""
Snapshot layout: signature header, change log, canonical schema.

A snapshot is three regions separated by blank lines::

    # @generated SignedSource<<...>>

    # BREAKING CHANGES LOG
    # ...

    type Query { ... }

The log region is empty (no markers at all) until the first breaking change is
recorded. Text is composed with ``"\\n"``; callers write it in text mode so the
file uses the platform line separator on disk.
"""

from __future__ import annotations

from dataclasses import dataclass

from bcchecker.core import signing
from bcchecker.core.changelog import BLOCK_TITLE

LINE_SEPARATOR = "\n"


@dataclass(frozen=True, slots=True)
class SnapshotParts:
    """The three regions of a snapshot text."""

    header: str
    change_log_block: str
    schema_text: str


def build(change_log_block: str, canonical_schema_text: str) -> str:
    """
    Compose the unsigned snapshot body.

    The header line holds the signing token; :func:`signing.sign` turns it
    into the signature. Same inputs always give byte-identical output.
    """
    sep = LINE_SEPARATOR
    return (
        f"# {signing.signing_token()}"
        + sep
        + sep
        + change_log_block
        + sep
        + sep
        + canonical_schema_text.rstrip(sep)
        + sep
    )


def create_snapshot(change_log_block: str, canonical_schema_text: str) -> str:
    """Build and sign a snapshot."""
    return signing.sign(build(change_log_block, canonical_schema_text))


def split_snapshot(text: str) -> SnapshotParts:
    """Split a snapshot text back into header, change log and schema regions."""
    lines = text.splitlines()
    if not lines:
        return SnapshotParts(header="", change_log_block="", schema_text="")

    header, rest = lines[0], lines[1:]
    i = 0
    while i < len(rest) and not rest[i].strip():
        i += 1

    block_lines: list[str] = []
    if i < len(rest) and rest[i] == BLOCK_TITLE:
        while i < len(rest) and rest[i].startswith("#"):
            block_lines.append(rest[i])
            i += 1
        while i < len(rest) and not rest[i].strip():
            i += 1

    schema_lines = rest[i:]
    schema_text = LINE_SEPARATOR.join(schema_lines)
    if schema_lines:
        schema_text += LINE_SEPARATOR
    return SnapshotParts(
        header=header,
        change_log_block=LINE_SEPARATOR.join(block_lines),
        schema_text=schema_text,
    )


__all__ = ["LINE_SEPARATOR", "SnapshotParts", "build", "create_snapshot", "split_snapshot"]
