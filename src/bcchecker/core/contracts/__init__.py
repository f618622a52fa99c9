"""Typed contracts shared by the signer, change log and orchestrator."""

from __future__ import annotations

from .change import ChangeEntry
from .outcome import CheckReport, Outcome

__all__ = ["ChangeEntry", "CheckReport", "Outcome"]
