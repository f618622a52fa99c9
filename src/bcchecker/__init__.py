"""bc-checker: keep a GraphQL schema backward compatible.

The package compares the current schema against a committed, signed snapshot
file and maintains a log of every breaking change that was ever approved.

Typical library use::

    from bcchecker import check_backward_compatibility

    report = check_backward_compatibility(
        allow_breaking_changes=False,
        snapshot_location="schema.snapshot.graphql",
        schema=schema,
    )
"""

from __future__ import annotations

from bcchecker.core.contracts.change import ChangeEntry
from bcchecker.core.contracts.outcome import CheckReport, Outcome
from bcchecker.pipelines.check import check_backward_compatibility

__all__ = [
    "__version__",
    "ChangeEntry",
    "CheckReport",
    "Outcome",
    "check_backward_compatibility",
]
__version__ = "0.1.0"
