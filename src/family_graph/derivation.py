"""Implied relation derivation.

Computes relations that logically must exist but are missing, so that the
graph stays semantically complete after an edit:

1. Spouse completion: if P is a parent of C, P has exactly one spouse S,
   and S's only spouse is P, then S is also a parent of C.
2. Parent-pair linking: when a parent P is added for C, every other
   recorded parent P2 of C that P is not married to is linked to P as a
   spouse.
3. Sibling materialization: a requested sibling B of A becomes a child of
   each of A's parents; only when A has no recorded parent is a raw
   sibling edge proposed.

Nothing here persists anything. Every proposal is checked against the
current snapshot first, so re-running on a set that already contains the
output proposes nothing, and a caller can retry a partially failed batch
of inserts safely.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .graph.snapshot import FamilySnapshot
from .logging import get_logger
from .models import Relation

logger = get_logger(__name__)

RelationRecords = Iterable[Relation | Mapping[str, Any]]


def _key(relation: Relation) -> tuple[str, str, str]:
    a, b = relation.person1_id, relation.person2_id
    if not relation.is_parent_child and b < a:
        a, b = b, a
    return (relation.relation_type, a, b)


def complete_spouse_parent(snapshot: FamilySnapshot, parent_id: str, child_id: str) -> Relation | None:
    """Rule 1 for a single parent/child pair."""
    spouses = snapshot.spouses_of(parent_id)
    if len(spouses) != 1:
        return None

    spouse_id = spouses[0]
    if spouse_id in (parent_id, child_id):
        return None
    # Marriage must be mutual and unambiguous
    if snapshot.spouses_of(spouse_id) != [parent_id]:
        return None
    if snapshot.has_parent_child(spouse_id, child_id):
        return None

    return Relation.parent_child(spouse_id, child_id)


def link_parent_pair(snapshot: FamilySnapshot, parent_id: str, child_id: str) -> list[Relation]:
    """Rule 2 for a newly added parent of ``child_id``.

    Each other recorded parent is checked on its own, so a child with two
    earlier parents can yield two spouse links.
    """
    return [
        Relation.spouse(parent_id, other_id)
        for other_id in snapshot.parents_of(child_id)
        if other_id != parent_id and not snapshot.has_marriage(parent_id, other_id)
    ]


class ImpliedRelationDeriver:
    """Derives implied relations for one family tree snapshot.

    Example:
        >>> deriver = ImpliedRelationDeriver([
        ...     Relation.parent_child("A", "B"),
        ...     Relation.spouse("A", "D"),
        ... ])
        >>> [(r.person1_id, r.person2_id) for r in deriver.derive()]
        [('D', 'B')]
    """

    def __init__(self, relations: RelationRecords) -> None:
        self.snapshot = FamilySnapshot.from_relations(relations)

    def derive(self) -> list[Relation]:
        """Apply spouse completion over the whole relation set.

        Iterates until nothing new is implied, so the returned list already
        contains everything its own additions would imply.
        """
        snapshot = self.snapshot
        derived: list[Relation] = []
        proposed: set[tuple[str, str, str]] = set()

        while True:
            batch: list[Relation] = []
            for relation in snapshot.relations:
                if not relation.is_parent_child or relation.person1_id == relation.person2_id:
                    continue
                candidate = complete_spouse_parent(snapshot, relation.person1_id, relation.person2_id)
                if candidate is not None and _key(candidate) not in proposed:
                    proposed.add(_key(candidate))
                    batch.append(candidate)

            if not batch:
                break
            derived.extend(batch)
            snapshot = snapshot.with_relations(batch)

        logger.debug("implied_relations_derived", count=len(derived))
        return derived

    def handle_spouse_relation_created(self, spouse1_id: str, spouse2_id: str) -> list[Relation]:
        """Relations implied by a new marriage between two persons.

        Each spouse becomes a parent of the other's existing children,
        provided the marriage is the only one either of them has.
        """
        if spouse1_id == spouse2_id:
            return []

        snapshot = self.snapshot
        if not snapshot.has_marriage(spouse1_id, spouse2_id):
            snapshot = snapshot.with_relations([Relation.spouse(spouse1_id, spouse2_id)])

        derived: list[Relation] = []
        proposed: set[tuple[str, str, str]] = set()
        for parent_id in (spouse1_id, spouse2_id):
            for child_id in snapshot.children_of(parent_id):
                candidate = complete_spouse_parent(snapshot, parent_id, child_id)
                if candidate is not None and _key(candidate) not in proposed:
                    proposed.add(_key(candidate))
                    derived.append(candidate)

        logger.debug(
            "spouse_relation_implications",
            spouse1_id=spouse1_id,
            spouse2_id=spouse2_id,
            count=len(derived),
        )
        return derived

    def handle_parent_child_created(self, parent_id: str, child_id: str) -> list[Relation]:
        """Relations implied by a new parent/child relation.

        Applies spouse completion for the new parent and links the new
        parent with each other recorded parent of the child.
        """
        if parent_id == child_id:
            return []

        snapshot = self.snapshot
        if not snapshot.has_parent_child(parent_id, child_id):
            snapshot = snapshot.with_relations([Relation.parent_child(parent_id, child_id)])

        derived: list[Relation] = []
        completed = complete_spouse_parent(snapshot, parent_id, child_id)
        if completed is not None:
            derived.append(completed)
        derived.extend(link_parent_pair(snapshot, parent_id, child_id))

        logger.debug(
            "parent_child_implications",
            parent_id=parent_id,
            child_id=child_id,
            count=len(derived),
        )
        return derived

    def request_sibling(self, person_id: str, sibling_id: str) -> list[Relation]:
        """Relations that express "``sibling_id`` is a sibling of ``person_id``".

        Siblinghood is recorded through shared parents whenever
        ``person_id`` has any; a raw sibling relation is the fallback.
        """
        if person_id == sibling_id:
            return []

        parents = self.snapshot.parents_of(person_id)
        if not parents:
            if self.snapshot.has_sibling(person_id, sibling_id):
                return []
            return [Relation.sibling(person_id, sibling_id)]

        return [
            Relation.parent_child(parent_id, sibling_id)
            for parent_id in parents
            if parent_id != sibling_id and not self.snapshot.has_parent_child(parent_id, sibling_id)
        ]


def derive(relations: RelationRecords) -> list[Relation]:
    """Implied relations missing from ``relations``."""
    return ImpliedRelationDeriver(relations).derive()


def handle_spouse_relation_created(
    spouse1_id: str,
    spouse2_id: str,
    relations: RelationRecords,
) -> list[Relation]:
    return ImpliedRelationDeriver(relations).handle_spouse_relation_created(spouse1_id, spouse2_id)


def handle_parent_child_created(
    parent_id: str,
    child_id: str,
    relations: RelationRecords,
) -> list[Relation]:
    return ImpliedRelationDeriver(relations).handle_parent_child_created(parent_id, child_id)


def request_sibling(person_id: str, sibling_id: str, relations: RelationRecords) -> list[Relation]:
    return ImpliedRelationDeriver(relations).request_sibling(person_id, sibling_id)
