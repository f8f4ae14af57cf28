"""Immutable relation index shared by derivation and layout.

Every map preserves first-seen order so that results never depend on hash
ordering.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import InvalidRelationError
from ..models import Relation, coerce_relations


def _append_unique(index: dict[str, dict[str, None]], key: str, value: str) -> None:
    index.setdefault(key, {})[value] = None


@dataclass(frozen=True)
class FamilySnapshot:
    """Parent, child, spouse and sibling lookups over one relation set."""

    relations: tuple[Relation, ...] = ()
    rejected: tuple[InvalidRelationError, ...] = ()
    _parents: dict[str, dict[str, None]] = field(default_factory=dict, repr=False)
    _children: dict[str, dict[str, None]] = field(default_factory=dict, repr=False)
    _spouses: dict[str, dict[str, None]] = field(default_factory=dict, repr=False)
    _siblings: dict[str, dict[str, None]] = field(default_factory=dict, repr=False)

    @classmethod
    def from_relations(
        cls,
        records: Iterable[Relation | Mapping[str, Any]],
        person_ids: Iterable[str] | None = None,
    ) -> FamilySnapshot:
        """Index ``records``.

        Args:
            records: Relation records or plain mappings
            person_ids: If given, relations touching any other id are ignored
        """
        relations, rejected = coerce_relations(records)
        known = set(person_ids) if person_ids is not None else None

        parents: dict[str, dict[str, None]] = {}
        children: dict[str, dict[str, None]] = {}
        spouses: dict[str, dict[str, None]] = {}
        siblings: dict[str, dict[str, None]] = {}

        for relation in relations:
            a, b = relation.person1_id, relation.person2_id
            if known is not None and (a not in known or b not in known):
                continue
            if relation.is_parent_child:
                _append_unique(children, a, b)
                _append_unique(parents, b, a)
            elif relation.is_marriage:
                _append_unique(spouses, a, b)
                _append_unique(spouses, b, a)
            elif relation.is_sibling:
                _append_unique(siblings, a, b)
                _append_unique(siblings, b, a)

        return cls(
            relations=tuple(relations),
            rejected=tuple(rejected),
            _parents=parents,
            _children=children,
            _spouses=spouses,
            _siblings=siblings,
        )

    def parents_of(self, person_id: str) -> list[str]:
        return list(self._parents.get(person_id, ()))

    def children_of(self, person_id: str) -> list[str]:
        return list(self._children.get(person_id, ()))

    def spouses_of(self, person_id: str) -> list[str]:
        """Current and former spouses, without duplicates."""
        return list(self._spouses.get(person_id, ()))

    def siblings_of(self, person_id: str) -> list[str]:
        """Siblings linked by an explicit sibling relation only."""
        return list(self._siblings.get(person_id, ()))

    def has_parent_child(self, parent_id: str, child_id: str) -> bool:
        return child_id in self._children.get(parent_id, {})

    def has_marriage(self, a: str, b: str) -> bool:
        return b in self._spouses.get(a, {})

    def has_sibling(self, a: str, b: str) -> bool:
        return b in self._siblings.get(a, {})

    def family_children_of(self, person_id: str) -> list[str]:
        """Children of the person together with children of all their spouses."""
        result: dict[str, None] = dict.fromkeys(self.children_of(person_id))
        for spouse_id in self.spouses_of(person_id):
            result.update(dict.fromkeys(self.children_of(spouse_id)))
        return list(result)

    def with_relations(self, extra: Iterable[Relation]) -> FamilySnapshot:
        """New snapshot with ``extra`` appended (existing ones are kept as is)."""
        return FamilySnapshot.from_relations([*self.relations, *extra])
