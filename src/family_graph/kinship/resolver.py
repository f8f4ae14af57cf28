"""Kinship resolution: "what is A to B?".

``resolve(A, B)`` runs a breadth-first search over the typed family graph
from A, keeps the first path that reaches B (fewest hops, then BFS
discovery order, which follows the order relations were supplied) and
reads it back from B's side: the resulting category names A as B's
relative, so A parent of B gives ``parent``. The label is gendered by A.

Disconnected people, unknown ids and paths longer than the configured
depth all resolve to the ``unknown`` category; nothing here raises on
malformed graph data. A visited set guarantees termination on cyclic
parent/child data.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..config import CONFIG, KinshipConfig
from ..graph.builder import FamilyGraph, build_graph
from ..logging import get_logger
from ..models import EdgeType, Gender, Person, Relation, coerce_persons
from .categories import KinshipCategory, classify_path
from .labels import render_label

logger = get_logger(__name__)


@dataclass(frozen=True)
class KinshipPath:
    """Shortest path between two persons."""
    person_ids: tuple[str, ...]
    edges: tuple[EdgeType, ...]

    @property
    def length(self) -> int:
        return len(self.edges)

    def reversed(self) -> KinshipPath:
        """The same path walked from the other end."""
        return KinshipPath(
            tuple(reversed(self.person_ids)),
            tuple(_INVERSE[edge] for edge in reversed(self.edges)),
        )


_INVERSE = {
    EdgeType.PARENT: EdgeType.CHILD,
    EdgeType.CHILD: EdgeType.PARENT,
    EdgeType.SPOUSE: EdgeType.SPOUSE,
    EdgeType.SIBLING: EdgeType.SIBLING,
}


@dataclass
class KinshipResult:
    """What ``from_id`` is to ``to_id``.

    ``path`` and ``person_path`` run from ``to_id`` to ``from_id``, the
    direction in which ``ups`` and ``downs`` are counted.
    """
    from_id: str
    to_id: str
    category: KinshipCategory
    label: str = ""
    gender: Gender = Gender.UNSPECIFIED

    path: list[EdgeType] = field(default_factory=list)
    person_path: list[str] = field(default_factory=list)
    ups: int = 0
    downs: int = 0
    via_spouse: bool = False
    spouse_of_relative: bool = False
    cousin_degree: int | None = None
    removal: int | None = None

    @property
    def is_related(self) -> bool:
        return self.category != KinshipCategory.UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "from_id": self.from_id,
            "to_id": self.to_id,
            "category": self.category.value,
            "label": self.label,
            "gender": self.gender.value,
            "path": [edge.value for edge in self.path],
            "person_path": list(self.person_path),
            "ups": self.ups,
            "downs": self.downs,
            "via_spouse": self.via_spouse,
            "spouse_of_relative": self.spouse_of_relative,
            "cousin_degree": self.cousin_degree,
            "removal": self.removal,
        }


_STEP_WORDS: dict[str, dict[EdgeType, str]] = {
    "en": {
        EdgeType.PARENT: "parent",
        EdgeType.CHILD: "child",
        EdgeType.SPOUSE: "spouse",
        EdgeType.SIBLING: "sibling",
    },
    "ru": {
        EdgeType.PARENT: "↑ родитель",
        EdgeType.CHILD: "↓ ребёнок",
        EdgeType.SPOUSE: "супруг(а)",
        EdgeType.SIBLING: "брат/сестра",
    },
}


def find_path(graph: FamilyGraph, from_id: str, to_id: str, max_depth: int = 15) -> KinshipPath | None:
    """Breadth-first search for the shortest typed path.

    Args:
        graph: Typed adjacency structure
        from_id: Start person
        to_id: Target person
        max_depth: Longest path (in hops) worth reporting

    Returns:
        KinshipPath, or None if ``to_id`` is not reachable within ``max_depth``
    """
    if from_id == to_id:
        return KinshipPath((from_id,), ())
    if from_id not in graph or to_id not in graph:
        return None

    visited: set[str] = {from_id}
    came_from: dict[str, tuple[str, EdgeType]] = {}
    queue: deque[tuple[str, int]] = deque([(from_id, 0)])

    while queue:
        current_id, depth = queue.popleft()
        if depth >= max_depth:
            continue

        for neighbor in graph.neighbors(current_id):
            if neighbor.person_id in visited:
                continue
            visited.add(neighbor.person_id)
            came_from[neighbor.person_id] = (current_id, neighbor.edge_type)

            if neighbor.person_id == to_id:
                return _reconstruct(came_from, from_id, to_id)

            queue.append((neighbor.person_id, depth + 1))

    return None


def _reconstruct(came_from: dict[str, tuple[str, EdgeType]], from_id: str, to_id: str) -> KinshipPath:
    person_ids = [to_id]
    edges: list[EdgeType] = []
    current = to_id
    while current != from_id:
        previous, edge = came_from[current]
        edges.append(edge)
        person_ids.append(previous)
        current = previous
    person_ids.reverse()
    edges.reverse()
    return KinshipPath(tuple(person_ids), tuple(edges))


class KinshipResolver:
    """Answers kinship queries against one family snapshot.

    The graph is built once, so a resolver can serve every query of a page
    view.

    Example:
        >>> resolver = KinshipResolver(
        ...     [Relation.parent_child("A", "B"), Relation.parent_child("B", "C")],
        ...     [Person(id="A", first_name="Anna", gender="female")],
        ... )
        >>> resolver.resolve("A", "C").label
        'grandmother'
    """

    def __init__(
        self,
        relations: Iterable[Relation | Mapping[str, Any]],
        persons: Iterable[Person | Mapping[str, Any]] = (),
        config: KinshipConfig | None = None,
        locale: str | None = None,
    ) -> None:
        self.config = config or CONFIG.kinship
        self.locale = locale or self.config.locale
        self.graph = build_graph(relations)
        self.persons: dict[str, Person] = {p.id: p for p in coerce_persons(persons)}

    def gender_of(self, person_id: str) -> Gender:
        person = self.persons.get(person_id)
        return person.gender if person else Gender.UNSPECIFIED

    def find_path(self, from_id: str, to_id: str) -> KinshipPath | None:
        return find_path(self.graph, from_id, to_id, self.config.max_path_depth)

    def resolve(self, from_id: str, to_id: str) -> KinshipResult:
        """What ``from_id`` is to ``to_id``."""
        gender = self.gender_of(from_id)

        if from_id == to_id:
            return KinshipResult(
                from_id=from_id,
                to_id=to_id,
                category=KinshipCategory.SELF,
                label=render_label(KinshipCategory.SELF, gender, locale=self.locale),
                gender=gender,
                person_path=[from_id],
            )

        found = self.find_path(from_id, to_id)
        if found is None:
            logger.debug("kinship_no_path", from_id=from_id, to_id=to_id)
            return KinshipResult(
                from_id=from_id,
                to_id=to_id,
                category=KinshipCategory.UNKNOWN,
                gender=gender,
            )

        path = found.reversed()
        classification = classify_path(path.edges)
        label = render_label(
            classification.category,
            gender,
            locale=self.locale,
            cousin_degree=classification.cousin_degree,
            removal=classification.removal,
            elder=classification.ups > classification.downs,
        )

        return KinshipResult(
            from_id=from_id,
            to_id=to_id,
            category=classification.category,
            label=label,
            gender=gender,
            path=list(path.edges),
            person_path=list(path.person_ids),
            ups=classification.ups,
            downs=classification.downs,
            via_spouse=classification.via_spouse,
            spouse_of_relative=classification.spouse_of_relative,
            cousin_degree=classification.cousin_degree,
            removal=classification.removal,
        )

    def explain(self, from_id: str, to_id: str) -> str:
        """Describe the hop-by-hop path from ``from_id`` to ``to_id``.

        Each step names the next person relative to the current one.
        """
        path = self.find_path(from_id, to_id)
        if path is None or path.length == 0:
            if self.locale == "ru":
                return "Нет найденной связи в семейном дереве"
            return "No connection found in the family tree"

        words = _STEP_WORDS.get(self.locale, _STEP_WORDS["en"])
        steps = " -> ".join(words[edge] for edge in path.edges)

        if self.locale == "ru":
            noun = "связь" if path.length == 1 else "связи"
            return f"Путь через {path.length} {noun}: {steps}"
        noun = "link" if path.length == 1 else "links"
        return f"Path of {path.length} {noun}: {steps}"

    def relationship_to_user(self, linked_person_id: str | None, target_id: str) -> str | None:
        """Label of ``target_id`` relative to the person the viewer is linked to.

        Returns None when the viewer has no linked person or no relation exists.
        """
        if not linked_person_id:
            return None

        result = self.resolve(target_id, linked_person_id)
        if not result.is_related:
            return None
        return result.label


def resolve(
    from_id: str,
    to_id: str,
    relations: Iterable[Relation | Mapping[str, Any]],
    persons: Iterable[Person | Mapping[str, Any]] = (),
    *,
    locale: str | None = None,
    config: KinshipConfig | None = None,
) -> KinshipResult:
    """One-shot kinship query: what ``from_id`` is to ``to_id``."""
    return KinshipResolver(relations, persons, config=config, locale=locale).resolve(from_id, to_id)


def relationship_to_user(
    linked_person_id: str | None,
    target_id: str,
    relations: Iterable[Relation | Mapping[str, Any]],
    persons: Iterable[Person | Mapping[str, Any]] = (),
    *,
    locale: str | None = None,
    config: KinshipConfig | None = None,
) -> str | None:
    """Label of ``target_id`` for the viewer linked to ``linked_person_id``."""
    resolver = KinshipResolver(relations, persons, config=config, locale=locale)
    return resolver.relationship_to_user(linked_person_id, target_id)
