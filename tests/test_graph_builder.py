"""Tests for typed graph construction and the relation snapshot index."""

from family_graph.graph import FamilySnapshot, GraphBuilder, Neighbor, build_graph
from family_graph.models import EdgeType, Relation


class TestGraphBuilder:
    """Tests for adjacency expansion."""

    def test_parent_child_expansion(self):
        """parent_child yields a child edge down and a parent edge up."""
        graph = build_graph([Relation.parent_child("P", "C")])

        assert graph.neighbors("P") == [Neighbor("C", EdgeType.CHILD)]
        assert graph.neighbors("C") == [Neighbor("P", EdgeType.PARENT)]

    def test_spouse_and_ex_spouse_are_bidirectional(self):
        graph = build_graph([
            Relation.spouse("A", "B"),
            {"person1_id": "A", "person2_id": "C", "relation_type": "ex_spouse"},
        ])

        assert graph.neighbors("A") == [Neighbor("B", EdgeType.SPOUSE), Neighbor("C", EdgeType.SPOUSE)]
        assert graph.neighbors("B") == [Neighbor("A", EdgeType.SPOUSE)]
        assert graph.neighbors("C") == [Neighbor("A", EdgeType.SPOUSE)]

    def test_sibling_is_bidirectional(self):
        graph = build_graph([Relation.sibling("A", "B")])
        assert graph.neighbors("A") == [Neighbor("B", EdgeType.SIBLING)]
        assert graph.neighbors("B") == [Neighbor("A", EdgeType.SIBLING)]

    def test_duplicates_collapse(self):
        """Repeated and mirrored relations produce each edge once."""
        graph = build_graph([
            Relation.parent_child("P", "C"),
            Relation.parent_child("P", "C"),
            Relation.spouse("A", "B"),
            Relation.spouse("B", "A"),
        ])

        assert graph.edge_count == 4
        assert graph.neighbors("A") == [Neighbor("B", EdgeType.SPOUSE)]

    def test_unknown_types_skipped(self):
        """Unrecognized relation types emit no edges and are not errors."""
        graph = build_graph([
            {"person1_id": "A", "person2_id": "B", "relation_type": "godparent"},
            {"person1_id": "A", "person2_id": "C", "relation_type": "godparent"},
        ])

        assert graph.node_count == 0
        assert graph.rejected == []
        assert graph.skipped_types == {"godparent": 2}

    def test_invalid_records_rejected_individually(self):
        """A bad record does not stop the remaining ones."""
        graph = GraphBuilder().build([
            {"person1_id": "", "person2_id": "B", "relation_type": "spouse"},
            Relation.parent_child("P", "C"),
        ])

        assert len(graph.rejected) == 1
        assert graph.rejected[0].index == 0
        assert "P" in graph
        assert "B" not in graph

    def test_edge_order_follows_input(self):
        graph = build_graph([
            Relation.parent_child("P", "C2"),
            Relation.parent_child("P", "C1"),
        ])
        assert [n.person_id for n in graph.neighbors("P")] == ["C2", "C1"]

    def test_empty_input(self):
        graph = build_graph([])
        assert graph.node_count == 0
        assert graph.neighbors("anyone") == []


class TestFamilySnapshot:
    """Tests for the parent/child/spouse index."""

    def test_lookups(self):
        snapshot = FamilySnapshot.from_relations([
            Relation.parent_child("A", "B"),
            Relation.parent_child("D", "B"),
            Relation.spouse("A", "D"),
            Relation.sibling("B", "E"),
        ])

        assert snapshot.parents_of("B") == ["A", "D"]
        assert snapshot.children_of("A") == ["B"]
        assert snapshot.spouses_of("D") == ["A"]
        assert snapshot.siblings_of("E") == ["B"]
        assert snapshot.has_parent_child("A", "B")
        assert not snapshot.has_parent_child("B", "A")
        assert snapshot.has_marriage("D", "A")
        assert snapshot.has_sibling("E", "B")

    def test_family_children_include_spouse_children(self):
        snapshot = FamilySnapshot.from_relations([
            Relation.parent_child("A", "B"),
            Relation.spouse("A", "D"),
            Relation.parent_child("D", "C"),
            Relation.parent_child("D", "B"),
        ])
        assert snapshot.family_children_of("A") == ["B", "C"]

    def test_unknown_persons_filtered(self):
        snapshot = FamilySnapshot.from_relations(
            [Relation.parent_child("A", "ghost"), Relation.spouse("A", "B")],
            person_ids=["A", "B"],
        )
        assert snapshot.children_of("A") == []
        assert snapshot.spouses_of("A") == ["B"]

    def test_with_relations_returns_new_snapshot(self):
        snapshot = FamilySnapshot.from_relations([Relation.parent_child("A", "B")])
        extended = snapshot.with_relations([Relation.parent_child("A", "C")])

        assert extended.children_of("A") == ["B", "C"]
        assert snapshot.children_of("A") == ["B"]
