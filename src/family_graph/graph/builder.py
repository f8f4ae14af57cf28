"""Typed adjacency construction for the family graph.

Expands a flat relation list into ``person_id -> [(neighbor_id, edge_type)]``:

- ``parent_child(P, C)`` yields ``P -child-> C`` and ``C -parent-> P``
- ``spouse`` / ``ex_spouse`` yield bidirectional ``spouse`` edges
- ``sibling`` yields bidirectional ``sibling`` edges

Identical ``(from, to, type)`` triples collapse to one edge, and unknown
relation types are skipped without complaint.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from ..exceptions import InvalidRelationError
from ..logging import get_logger
from ..models import EdgeType, Relation, RelationType, coerce_relations

logger = get_logger(__name__)


class Neighbor(NamedTuple):
    """One outgoing edge: ``person_id`` is the source's ``edge_type``."""
    person_id: str
    edge_type: EdgeType


@dataclass
class FamilyGraph:
    """Adjacency structure built from one relation snapshot.

    Edge lists keep the order in which relations were supplied; search
    tie-breaks depend on it.
    """
    adjacency: dict[str, list[Neighbor]] = field(default_factory=dict)
    relations: list[Relation] = field(default_factory=list)
    rejected: list[InvalidRelationError] = field(default_factory=list)
    skipped_types: dict[str, int] = field(default_factory=dict)

    def neighbors(self, person_id: str) -> list[Neighbor]:
        return self.adjacency.get(person_id, [])

    def __contains__(self, person_id: object) -> bool:
        return person_id in self.adjacency

    @property
    def node_count(self) -> int:
        return len(self.adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self.adjacency.values())


class GraphBuilder:
    """Builds a FamilyGraph from relation records.

    Example:
        >>> graph = GraphBuilder().build([Relation.parent_child("A", "B")])
        >>> graph.neighbors("B")
        [Neighbor(person_id='A', edge_type=<EdgeType.PARENT: 'parent'>)]
    """

    def build(self, records: Iterable[Relation | Mapping[str, Any]]) -> FamilyGraph:
        relations, rejected = coerce_relations(records)
        graph = FamilyGraph(relations=relations, rejected=rejected)
        seen: set[tuple[str, str, EdgeType]] = set()

        for error in rejected:
            logger.warning("relation_rejected", reason=error.reason, index=error.index)

        def add_edge(source: str, target: str, edge_type: EdgeType) -> None:
            key = (source, target, edge_type)
            if key in seen:
                return
            seen.add(key)
            graph.adjacency.setdefault(source, []).append(Neighbor(target, edge_type))

        for relation in relations:
            a, b = relation.person1_id, relation.person2_id
            if relation.relation_type == RelationType.PARENT_CHILD.value:
                add_edge(a, b, EdgeType.CHILD)
                add_edge(b, a, EdgeType.PARENT)
            elif relation.is_marriage:
                add_edge(a, b, EdgeType.SPOUSE)
                add_edge(b, a, EdgeType.SPOUSE)
            elif relation.relation_type == RelationType.SIBLING.value:
                add_edge(a, b, EdgeType.SIBLING)
                add_edge(b, a, EdgeType.SIBLING)
            else:
                graph.skipped_types[relation.relation_type] = (
                    graph.skipped_types.get(relation.relation_type, 0) + 1
                )

        logger.debug(
            "family_graph_built",
            nodes=graph.node_count,
            edges=graph.edge_count,
            rejected=len(rejected),
            skipped=sum(graph.skipped_types.values()),
        )
        return graph


def build_graph(records: Iterable[Relation | Mapping[str, Any]]) -> FamilyGraph:
    """Build the typed adjacency structure for ``records``."""
    return GraphBuilder().build(records)
