"""
Breaking-change log embedded in the snapshot.

The log is an append-only, deduplicated record of every breaking change that
was ever accepted into the snapshot. It is rendered as SDL comment lines so the
snapshot stays a readable schema file, oldest entries first, grouped by the
date of the run that recorded them::

    # BREAKING CHANGES LOG
    #
    # 2026-10-19
    #   FIELD_REMOVED: RootQuery.test was removed.
    #   TYPE_REMOVED: Test was removed.

Merging
-------
Entries are keyed by ``(kind, description)`` in an insertion-ordered dict:
previous entries keep their position and date, unseen entries are appended.
An empty history with no new changes renders to the empty string, so the
snapshot then has no log region at all.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import date
from itertools import groupby

from bcchecker.core.contracts.change import ChangeEntry, ChangeIdentity
from bcchecker.core.errors import ChangeLogFormatError

BLOCK_TITLE = "# BREAKING CHANGES LOG"

_DATE_RE = re.compile(r"^# (?P<date>\d{4}-\d{2}-\d{2})$")
_ENTRY_RE = re.compile(r"^#   (?P<kind>[A-Za-z][A-Za-z0-9_]*): (?P<description>.+)$")


def parse_block(text: str) -> list[ChangeEntry]:
    """
    Parse a rendered block back into its entries.

    Raises
    ------
    ChangeLogFormatError
        If ``text`` is not empty and is not a block produced by :func:`render_block`.
    """
    lines = text.strip("\n").splitlines()
    if not lines:
        return []
    if lines[0] != BLOCK_TITLE or (len(lines) > 1 and lines[1] != "#"):
        raise ChangeLogFormatError(f"change log must start with {BLOCK_TITLE!r}")

    entries: list[ChangeEntry] = []
    current: date | None = None
    for lineno, line in enumerate(lines[2:], start=3):
        if m := _DATE_RE.match(line):
            try:
                current = date.fromisoformat(m["date"])
            except ValueError as exc:
                raise ChangeLogFormatError(f"line {lineno}: bad date {m['date']!r}") from exc
            continue
        m = _ENTRY_RE.match(line)
        if m is None or current is None:
            raise ChangeLogFormatError(f"line {lineno}: unexpected change log line {line!r}")
        entries.append(
            ChangeEntry(kind=m["kind"], description=m["description"], detected_on=current)
        )
    return entries


def render_block(entries: Sequence[ChangeEntry]) -> str:
    """Render ``entries`` in order; an empty sequence renders to ``""``."""
    if not entries:
        return ""
    lines = [BLOCK_TITLE, "#"]
    for day, group in groupby(entries, key=lambda e: e.detected_on):
        if day is None:
            raise ValueError("change log entries must carry a detection date")
        lines.append(f"# {day.isoformat()}")
        lines.extend(f"#   {e.kind}: {e.description}" for e in group)
    return "\n".join(lines)


def merge_entries(
    previous: Iterable[ChangeEntry],
    newly_detected: Iterable[ChangeEntry],
    *,
    detected_on: date,
) -> list[ChangeEntry]:
    """
    Union of ``previous`` and ``newly_detected``, deduplicated by identity.

    Previous entries are kept as recorded. New entries without a date are
    stamped with ``detected_on``.
    """
    merged: dict[ChangeIdentity, ChangeEntry] = {}
    for entry in previous:
        merged.setdefault(entry.identity, entry)
    for entry in newly_detected:
        if entry.identity in merged:
            continue
        if entry.detected_on is None:
            entry = entry.model_copy(update={"detected_on": detected_on})
        merged[entry.identity] = entry
    return list(merged.values())


def build_block(
    previous_block_text: str,
    newly_detected: Iterable[ChangeEntry] = (),
    *,
    detected_on: date | None = None,
) -> str:
    """Merge ``newly_detected`` into the previous block and render the result."""
    entries = merge_entries(
        parse_block(previous_block_text),
        newly_detected,
        detected_on=detected_on or date.today(),
    )
    return render_block(entries)


__all__ = ["BLOCK_TITLE", "build_block", "merge_entries", "parse_block", "render_block"]
