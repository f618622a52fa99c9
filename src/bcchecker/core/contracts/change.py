"""
Change Entry Contract

One detected schema change, as reported by the comparison engine and as
recorded in the snapshot's change log.

Identity
--------
Two entries are the *same* change when their ``(kind, description)`` pair is
equal. ``detected_on`` records the run in which the change was first seen and
does not take part in identity, so a rediscovered change keeps its original
date.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

ChangeIdentity = tuple[str, str]


class ChangeEntry(BaseModel):
    """A single breaking or dangerous schema change."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(
        ...,
        description="Change category, e.g. 'FIELD_REMOVED'.",
        pattern=r"^[A-Za-z][A-Za-z0-9_]*$",
    )
    description: str = Field(..., min_length=1, description="Human-readable, single line.")
    detected_on: date | None = Field(
        default=None, description="Date of the run that first recorded this change."
    )

    @field_validator("description")
    @classmethod
    def _single_line(cls, v: str) -> str:
        """Collapse whitespace so the entry renders as one comment line."""
        collapsed = " ".join(v.split())
        if not collapsed:
            raise ValueError("description must not be blank")
        return collapsed

    @property
    def identity(self) -> ChangeIdentity:
        """Key used to deduplicate entries across runs."""
        return (self.kind, self.description)


__all__ = ["ChangeEntry", "ChangeIdentity"]
