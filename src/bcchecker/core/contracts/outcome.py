"""Run outcomes and the report returned by the orchestrator.

An :class:`Outcome` is never persisted. It is the decision for the current
invocation and only drives the process exit code: everything except
``UNCHANGED`` and ``BREAKING_CHANGES_ALLOWED`` stops and asks a human to act.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .change import ChangeEntry


class Outcome(str, Enum):
    """Process-level decision of one check run."""

    FIRST_RUN = "first_run"
    UNCHANGED = "unchanged"
    TAMPERED_DETECTED = "tampered_detected"
    BREAKING_CHANGES_BLOCKED = "breaking_changes_blocked"
    BREAKING_CHANGES_ALLOWED = "breaking_changes_allowed"
    SNAPSHOT_REGENERATED = "snapshot_regenerated"

    @property
    def exit_code(self) -> int:
        """Return 0 when no further action is needed, 1 otherwise."""
        if self in (Outcome.UNCHANGED, Outcome.BREAKING_CHANGES_ALLOWED):
            return 0
        return 1


@dataclass(frozen=True, slots=True)
class CheckReport:
    """
    Result of a completed (non-fatal) check run.

    Attributes
    ----------
    outcome : Outcome
        The decision for this run.
    snapshot_location : Path
        File that was read and possibly written.
    snapshot : str
        The signed snapshot text produced by this run.
    written : bool
        True when ``snapshot`` was written to ``snapshot_location``.
    breaking_changes, dangerous_changes : list[ChangeEntry]
        Changes reported by the comparison engine (empty on first run).
    """

    outcome: Outcome
    snapshot_location: Path
    snapshot: str
    written: bool
    breaking_changes: list[ChangeEntry] = field(default_factory=list)
    dangerous_changes: list[ChangeEntry] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return self.outcome.exit_code


__all__ = ["CheckReport", "Outcome"]
