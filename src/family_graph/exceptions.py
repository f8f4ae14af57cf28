from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class FamilyGraphError(Exception):
    """Base class for errors raised by the family graph engine."""


@dataclass
class InvalidRelationError(FamilyGraphError):
    """A relation record that cannot be interpreted.

    Scenarios:
    - Missing ``person1_id`` or ``person2_id``
    - Empty ``relation_type`` string
    - Not a mapping or Relation at all

    The engine collects these instead of raising them, so one bad record
    never aborts processing of the rest.
    """

    reason: str
    index: int | None = None
    record: Any = None

    def __str__(self) -> str:
        base = self.reason
        if self.index is not None:
            base = f"relation #{self.index}: {base}"
        return base
