"""Error taxonomy for snapshot checks.

Fatal conditions are exceptions that carry the :class:`Outcome` they map to,
so the CLI can report them and pick the exit code without re-deriving it.
A missing snapshot file is not an error here: it is the first-run path.
Unexpected I/O failures are not wrapped; the ``OSError`` propagates as raised.
"""

from __future__ import annotations

from collections.abc import Sequence

from bcchecker.core.contracts.change import ChangeEntry
from bcchecker.core.contracts.outcome import Outcome


class SnapshotError(Exception):
    """Base class for fatal snapshot check conditions."""

    outcome: Outcome = Outcome.TAMPERED_DETECTED


class TamperedSnapshotError(SnapshotError):
    """The snapshot's embedded signature does not match its content."""

    outcome = Outcome.TAMPERED_DETECTED

    def __init__(self, snapshot_location: object) -> None:
        super().__init__(
            f"Manual changes of the schema snapshot detected in {snapshot_location}. "
            "Please do not update the snapshot manually, it is autogenerated."
        )
        self.snapshot_location = snapshot_location


class BreakingChangesBlockedError(SnapshotError):
    """Breaking changes were found and the configuration does not allow them."""

    outcome = Outcome.BREAKING_CHANGES_BLOCKED

    def __init__(self, changes: Sequence[ChangeEntry]) -> None:
        self.changes: list[ChangeEntry] = list(changes)
        super().__init__(f"{len(self.changes)} breaking change(s) detected")


class ChangeLogFormatError(ValueError):
    """A change-log block could not be parsed back into entries."""


class SchemaLoadError(ValueError):
    """A schema source could not be resolved into a schema."""


__all__ = [
    "BreakingChangesBlockedError",
    "ChangeLogFormatError",
    "SchemaLoadError",
    "SnapshotError",
    "TamperedSnapshotError",
]
