"""
Backward-compatibility check: compare the schema against its signed snapshot.

Flow Overview
-------------
1. **Read** the snapshot file. A missing file is the *first run*: the current
   schema is snapshotted with an empty change log and the run still fails, so
   the new file gets committed deliberately.
2. **Verify** the signature. A hand-edited snapshot is never trusted and
   nothing is compared or written.
3. **Compare** the snapshot's schema region with the current schema. Breaking
   changes stop the run unless they are allowed; dangerous changes are only
   reported.
4. **Rebuild** the change log and the signed snapshot from the current schema.
5. **Decide**: identical text means nothing to do; otherwise the file is
   rewritten and the run fails so the regenerated snapshot gets committed.
   Identical text with breaking changes would be ``BREAKING_CHANGES_ALLOWED``,
   which a comparison engine like graphql-core never produces: a breaking
   change always alters the canonical schema text. Only a custom
   :class:`SchemaAdapter` can reach it.

The snapshot file is assumed to have a single writer per invocation; there is
no locking.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from bcchecker.core import signing
from bcchecker.core.changelog import build_block
from bcchecker.core.contracts.change import ChangeEntry
from bcchecker.core.contracts.outcome import CheckReport, Outcome
from bcchecker.core.errors import BreakingChangesBlockedError, TamperedSnapshotError
from bcchecker.core.settings import get_logger
from bcchecker.core.snapshot import create_snapshot, split_snapshot
from bcchecker.schema.adapter import GraphQLSchemaAdapter, SchemaAdapter

logger = get_logger(__name__)


def _read_snapshot(location: Path) -> str | None:
    """Return the snapshot text, or None when the file does not exist yet."""
    try:
        return location.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError:
        logger.error("Could not read snapshot %s", location, exc_info=True)
        raise


def _write_snapshot(location: Path, text: str) -> None:
    location.write_text(text, encoding="utf-8")
    logger.info("Snapshot written to %s", location)


def _first_run(location: Path, canonical_schema_text: str) -> CheckReport:
    logger.info("No snapshot at %s, creating it", location)
    snapshot = create_snapshot(build_block(""), canonical_schema_text)
    _write_snapshot(location, snapshot)
    return CheckReport(
        outcome=Outcome.FIRST_RUN,
        snapshot_location=location,
        snapshot=snapshot,
        written=True,
    )


def _log_changes(label: str, changes: list[ChangeEntry], level: str) -> None:
    log = getattr(logger, level)
    log("%d %s change(s) detected", len(changes), label)
    for change in changes:
        log("  %s: %s", change.kind, change.description)


def check_backward_compatibility(
    *,
    allow_breaking_changes: bool,
    snapshot_location: str | Path,
    schema: Any,
    adapter: SchemaAdapter | None = None,
    today: date | None = None,
) -> CheckReport:
    """
    Run one check of ``schema`` against the snapshot at ``snapshot_location``.

    Parameters
    ----------
    allow_breaking_changes:
        Record breaking changes in the log instead of failing on them.
    snapshot_location:
        Path of the signed snapshot file.
    schema:
        Current schema handle, understood by ``adapter``.
    adapter:
        Schema collaborators; defaults to :class:`GraphQLSchemaAdapter`.
    today:
        Date stamped on newly recorded changes; defaults to today.

    Returns
    -------
    CheckReport
        For the non-fatal outcomes ``FIRST_RUN``, ``UNCHANGED``,
        ``BREAKING_CHANGES_ALLOWED`` and ``SNAPSHOT_REGENERATED``.
        ``BREAKING_CHANGES_ALLOWED`` needs an adapter that reports breaking
        changes between schemas with identical canonical text.

    Raises
    ------
    TamperedSnapshotError
        The snapshot signature does not match its content.
    BreakingChangesBlockedError
        Breaking changes were found and are not allowed. Nothing is written.
    OSError
        Any read/write failure other than a missing snapshot, unchanged.
    """
    adapter = adapter or GraphQLSchemaAdapter()
    location = Path(snapshot_location)
    canonical_schema_text = adapter.render_canonical_schema_text(schema)

    old_snapshot = _read_snapshot(location)
    if old_snapshot is None:
        return _first_run(location, canonical_schema_text)

    if not signing.verify(old_snapshot):
        logger.error("Snapshot %s failed signature verification", location)
        raise TamperedSnapshotError(location)
    logger.debug("Snapshot %s signature verified", location)

    parts = split_snapshot(old_snapshot)
    old_schema = adapter.parse_schema_text(parts.schema_text)

    breaking_changes = adapter.compare_for_breaking_changes(old_schema, schema)
    if breaking_changes:
        _log_changes("breaking", breaking_changes, "warning")
        if not allow_breaking_changes:
            raise BreakingChangesBlockedError(breaking_changes)

    dangerous_changes = adapter.compare_for_dangerous_changes(old_schema, schema)
    if dangerous_changes:
        _log_changes("dangerous", dangerous_changes, "info")

    block = build_block(parts.change_log_block, breaking_changes, detected_on=today)
    new_snapshot = create_snapshot(block, canonical_schema_text)

    if new_snapshot == old_snapshot:
        outcome = Outcome.BREAKING_CHANGES_ALLOWED if breaking_changes else Outcome.UNCHANGED
        logger.info("Snapshot %s is up to date", location)
        written = False
    else:
        logger.warning("Snapshot %s is outdated, updating it", location)
        _write_snapshot(location, new_snapshot)
        outcome = Outcome.SNAPSHOT_REGENERATED
        written = True

    return CheckReport(
        outcome=outcome,
        snapshot_location=location,
        snapshot=new_snapshot,
        written=written,
        breaking_changes=breaking_changes,
        dangerous_changes=dangerous_changes,
    )


__all__ = ["check_backward_compatibility"]
