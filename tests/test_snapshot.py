"""Unit tests for snapshot composition and region splitting."""

from __future__ import annotations

from datetime import date

from bcchecker.core import signing
from bcchecker.core.changelog import build_block
from bcchecker.core.contracts.change import ChangeEntry
from bcchecker.core.snapshot import build, create_snapshot, split_snapshot

SCHEMA = "type Query {\n  a: Int\n}"
REMOVED = ChangeEntry(kind="FIELD_REMOVED", description="Query.b was removed.")


def test_build_layout_without_change_log() -> None:
    body = build("", SCHEMA)
    assert body == f"# {signing.SIGNING_TOKEN}\n\n\n\n{SCHEMA}\n"


def test_build_layout_with_change_log() -> None:
    block = build_block("", [REMOVED], detected_on=date(2026, 10, 19))
    body = build(block, SCHEMA)
    assert body == f"# {signing.SIGNING_TOKEN}\n\n{block}\n\n{SCHEMA}\n"


def test_build_is_deterministic() -> None:
    assert build("", SCHEMA) == build("", SCHEMA)
    assert create_snapshot("", SCHEMA) == create_snapshot("", SCHEMA)


def test_created_snapshot_verifies() -> None:
    snapshot = create_snapshot("", SCHEMA)
    assert signing.verify(snapshot)
    assert snapshot.startswith("# @generated SignedSource<<")


def test_split_recovers_regions() -> None:
    block = build_block("", [REMOVED], detected_on=date(2026, 10, 19))
    parts = split_snapshot(create_snapshot(block, SCHEMA))

    assert parts.header.startswith("# @generated SignedSource<<")
    assert parts.change_log_block == block
    assert parts.schema_text == SCHEMA + "\n"


def test_split_without_change_log() -> None:
    parts = split_snapshot(create_snapshot("", SCHEMA))
    assert parts.change_log_block == ""
    assert parts.schema_text == SCHEMA + "\n"


def test_split_handles_platform_line_endings() -> None:
    snapshot = create_snapshot("", SCHEMA).replace("\n", "\r\n")
    parts = split_snapshot(snapshot)
    assert parts.schema_text == SCHEMA + "\n"


def test_split_empty_text() -> None:
    parts = split_snapshot("")
    assert (parts.header, parts.change_log_block, parts.schema_text) == ("", "", "")
