"""Manual position overrides on top of a computed layout."""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..models import LayoutPosition, Person, coerce_persons


def merge_positions(
    computed: Iterable[LayoutPosition],
    persons: Iterable[Person | Mapping[str, Any]],
    dragged_ids: Iterable[str] | None = None,
) -> list[LayoutPosition]:
    """Replace computed coordinates with stored ones for dragged persons.

    Args:
        computed: Output of the layout engine
        persons: Person records carrying ``position_x`` / ``position_y``
        dragged_ids: Persons the user moved by hand. When omitted, every
            person with both stored coordinates counts as dragged.

    Returns:
        Positions in the order of ``computed``
    """
    stored = {
        p.id: (p.position_x, p.position_y)
        for p in coerce_persons(persons)
        if p.position_x is not None and p.position_y is not None
    }
    if dragged_ids is not None:
        wanted = set(dragged_ids)
        stored = {pid: xy for pid, xy in stored.items() if pid in wanted}

    merged: list[LayoutPosition] = []
    for position in computed:
        override = stored.get(position.person_id)
        if override is None:
            merged.append(position)
        else:
            merged.append(LayoutPosition(position.person_id, override[0], override[1]))
    return merged
