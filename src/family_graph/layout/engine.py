"""Classic family tree layout.

Generations run top to bottom with the oldest at the top, spouses sit next
to each other, and children are centered below their parents.

Coordinates are node centers. The result is a pure function of the input:
every internal ordering follows the order persons and relations were given,
so identical input always yields identical output.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from ..config import CONFIG, LayoutConfig
from ..graph.snapshot import FamilySnapshot
from ..logging import get_logger
from ..models import LayoutPosition, Person, Relation, coerce_persons

logger = get_logger(__name__)


class LayoutStyle(str, Enum):
    CLASSIC = "classic"


class TreeLayoutEngine:
    """Assigns generations and 2-D coordinates to every person of a tree.

    One engine instance lays out one snapshot; call :meth:`layout` to get
    the positions.

    Example:
        >>> engine = TreeLayoutEngine(
        ...     [Person(id="A", first_name="Ann"), Person(id="B", first_name="Bob")],
        ...     [Relation.parent_child("A", "B")],
        ... )
        >>> [(p.person_id, p.y) for p in engine.layout()]
        [('A', 0.0), ('B', 220.0)]
    """

    def __init__(
        self,
        persons: Iterable[Person | Mapping[str, Any]],
        relations: Iterable[Relation | Mapping[str, Any]],
        config: LayoutConfig | None = None,
    ) -> None:
        self.config = config or CONFIG.layout
        self.persons: dict[str, Person] = {p.id: p for p in coerce_persons(persons)}
        self.snapshot = FamilySnapshot.from_relations(relations, person_ids=self.persons)

        self.generations: dict[str, int] = {}
        self._widths: dict[str, float] = {}
        self._subtree_widths: dict[str, float] = {}
        self._in_progress: set[str] = set()
        self._positions: dict[str, tuple[float, float]] = {}

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def is_root(self, person_id: str) -> bool:
        """No recorded parent, and not married to anyone who has one."""
        if self.snapshot.parents_of(person_id):
            return False
        return not any(self.snapshot.parents_of(spouse_id) for spouse_id in self.snapshot.spouses_of(person_id))

    def roots(self) -> list[str]:
        return [person_id for person_id in self.persons if self.is_root(person_id)]

    def assign_generations(self) -> dict[str, int]:
        """Breadth-first generation numbers starting at 0 for every root.

        Spouses share their partner's generation and children sit one below.
        Persons no root reaches default to generation 0.
        """
        generations: dict[str, int] = {}
        queue: deque[tuple[str, int]] = deque((root_id, 0) for root_id in self.roots())

        while queue:
            person_id, generation = queue.popleft()
            if person_id in generations:
                continue
            generations[person_id] = generation

            for spouse_id in self.snapshot.spouses_of(person_id):
                if spouse_id not in generations:
                    generations[spouse_id] = generation

            for child_id in self.snapshot.family_children_of(person_id):
                if child_id not in generations:
                    queue.append((child_id, generation + 1))

        for person_id in self.persons:
            generations.setdefault(person_id, 0)

        self.generations = generations
        return generations

    # ------------------------------------------------------------------
    # Widths
    # ------------------------------------------------------------------

    def node_width(self, person_id: str) -> float:
        width = self._widths.get(person_id)
        if width is None:
            person = self.persons.get(person_id)
            if person is None:
                width = self.config.default_node_width
            else:
                width = self.config.node_width_for(person.display_name)
            self._widths[person_id] = width
        return width

    def couple_width(self, person_id: str) -> float:
        """Own width, plus the first spouse and the spouse gap when married."""
        width = self.node_width(person_id)
        spouses = self.snapshot.spouses_of(person_id)
        if spouses:
            width += self.config.spouse_gap + self.node_width(spouses[0])
        return width

    def subtree_width(self, person_id: str) -> float:
        """Horizontal space taken by a person's couple and all descendants.

        Computed bottom-up with an explicit stack, so tree depth is not
        bounded by the interpreter's recursion limit. A child that is still
        an open ancestor on the stack (cyclic data) counts as a single node.
        """
        cached = self._subtree_widths.get(person_id)
        if cached is not None:
            return cached

        stack: list[tuple[str, bool]] = [(person_id, False)]
        while stack:
            current_id, children_done = stack.pop()
            if current_id in self._subtree_widths:
                continue
            children = self.snapshot.family_children_of(current_id)

            if not children_done:
                self._in_progress.add(current_id)
                stack.append((current_id, True))
                for child_id in reversed(children):
                    if child_id not in self._subtree_widths and child_id not in self._in_progress:
                        stack.append((child_id, False))
                continue

            widths = []
            for child_id in children:
                child_width = self._subtree_widths.get(child_id)
                if child_width is None:
                    logger.warning("layout_cycle_detected", person_id=child_id)
                    child_width = self.node_width(child_id)
                widths.append(child_width)

            width = self.couple_width(current_id)
            if children:
                width = max(sum(widths) + self.config.horizontal_gap * (len(children) - 1), width)
            self._in_progress.discard(current_id)
            self._subtree_widths[current_id] = width

        return self._subtree_widths[person_id]

    def _children_span(self, children: list[str]) -> float:
        total = sum(self.subtree_width(child_id) for child_id in children)
        return total + self.config.horizontal_gap * (len(children) - 1)

    # ------------------------------------------------------------------
    # Positioning
    # ------------------------------------------------------------------

    def _y(self, person_id: str) -> float:
        return self.generations.get(person_id, 0) * self.config.vertical_spacing

    def position_family(self, person_id: str, center_x: float) -> None:
        """Place a person, their first unplaced spouse and their children.

        The couple is centered on ``center_x`` and the children are laid
        out left to right below it, depth first in child order. Persons
        already placed are left alone.
        """
        stack: list[tuple[str, float]] = [(person_id, center_x)]
        while stack:
            current_id, x = stack.pop()
            if current_id in self._positions:
                continue

            y = self._y(current_id)
            own_width = self.node_width(current_id)
            free_spouses = [s for s in self.snapshot.spouses_of(current_id) if s not in self._positions]

            if free_spouses:
                spouse_id = free_spouses[0]
                spouse_width = self.node_width(spouse_id)
                couple = own_width + self.config.spouse_gap + spouse_width
                self._positions[current_id] = (x - couple / 2 + own_width / 2, y)
                self._positions[spouse_id] = (x + couple / 2 - spouse_width / 2, self._y(spouse_id))
            else:
                self._positions[current_id] = (x, y)

            children = self.snapshot.family_children_of(current_id)
            if not children:
                continue

            placements: list[tuple[str, float]] = []
            current_x = x - self._children_span(children) / 2
            for child_id in children:
                child_width = self.subtree_width(child_id)
                placements.append((child_id, current_x + child_width / 2))
                current_x += child_width + self.config.horizontal_gap
            stack.extend(reversed(placements))

    def layout(self) -> list[LayoutPosition]:
        """Compute one position per person, in input order."""
        if not self.persons:
            return []

        self._positions = {}
        self.assign_generations()
        roots = self.roots()

        current_x = 0.0
        root_gap = self.config.horizontal_gap * self.config.root_gap_factor
        for root_id in roots:
            if root_id in self._positions:
                continue
            width = self.subtree_width(root_id)
            self.position_family(root_id, current_x + width / 2)
            current_x += width + root_gap

        # Persons no root family reached (e.g. members of a parent/child cycle)
        unplaced = [person_id for person_id in self.persons if person_id not in self._positions]
        for person_id in unplaced:
            width = self.node_width(person_id)
            self._positions[person_id] = (current_x + width / 2, self._y(person_id))
            current_x += width + self.config.horizontal_gap

        xs = [x for x, _ in self._positions.values()]
        shift = -(min(xs) + max(xs)) / 2

        logger.debug(
            "tree_layout_computed",
            persons=len(self.persons),
            roots=len(roots),
            unplaced=len(unplaced),
        )

        return [
            LayoutPosition(person_id, self._positions[person_id][0] + shift, self._positions[person_id][1])
            for person_id in self.persons
        ]


def layout(
    persons: Iterable[Person | Mapping[str, Any]],
    relations: Iterable[Relation | Mapping[str, Any]],
    style: LayoutStyle | str = LayoutStyle.CLASSIC,
    config: LayoutConfig | None = None,
) -> list[LayoutPosition]:
    """Positions for every person of a tree.

    Args:
        persons: Person records (models or plain mappings)
        relations: Relation records
        style: Layout style; only ``classic`` exists, other values fall back to it
        config: Spacing overrides

    Returns:
        One LayoutPosition per distinct input person, in input order
    """
    try:
        LayoutStyle(style)
    except ValueError:
        logger.warning("unknown_layout_style", style=str(style), fallback=LayoutStyle.CLASSIC.value)
    return TreeLayoutEngine(persons, relations, config=config).layout()
