"""Tests for the classic tree layout."""

import pytest

from family_graph.config import LayoutConfig
from family_graph.layout import LayoutStyle, TreeLayoutEngine, layout, merge_positions
from family_graph.models import LayoutPosition, Person, Relation


def people(*ids):
    """Persons with short names, so every node has the minimum width (150)."""
    return [Person(id=pid, first_name=pid) for pid in ids]


def coords(positions):
    return {p.person_id: (p.x, p.y) for p in positions}


class TestNodeWidth:
    """Tests for name-based node widths."""

    def test_clamped_to_minimum(self):
        assert LayoutConfig().node_width_for("") == 150

    def test_proportional_to_name(self):
        assert LayoutConfig().node_width_for("Anna Smith") == pytest.approx(88 + 10 * 8)

    def test_clamped_to_maximum(self):
        assert LayoutConfig().node_width_for("x" * 40) == 300

    def test_unknown_person_uses_default(self):
        engine = TreeLayoutEngine([], [])
        assert engine.node_width("ghost") == 180


class TestStructure:
    """Tests for roots and generations."""

    def test_parentless_spouse_of_child_is_not_root(self):
        engine = TreeLayoutEngine(
            people("P", "C", "S"),
            [Relation.parent_child("P", "C"), Relation.spouse("C", "S")],
        )
        assert engine.roots() == ["P"]
        assert engine.assign_generations() == {"P": 0, "C": 1, "S": 1}

    def test_root_couple(self):
        engine = TreeLayoutEngine(
            people("A", "D", "B"),
            [Relation.spouse("A", "D"), Relation.parent_child("A", "B")],
        )
        assert engine.roots() == ["A", "D"]
        assert engine.assign_generations() == {"A": 0, "D": 0, "B": 1}

    def test_children_of_married_in_spouse(self):
        """A spouse's children sit one generation below the couple."""
        engine = TreeLayoutEngine(
            people("P", "C", "S", "K"),
            [
                Relation.parent_child("P", "C"),
                Relation.spouse("C", "S"),
                Relation.parent_child("S", "K"),
            ],
        )
        assert engine.assign_generations()["K"] == 2

    def test_unreachable_defaults_to_zero(self):
        engine = TreeLayoutEngine(
            people("A", "B"),
            [Relation.parent_child("A", "B"), Relation.parent_child("B", "A")],
        )
        assert engine.roots() == []
        assert engine.assign_generations() == {"A": 0, "B": 0}


class TestLayout:
    """Tests for computed coordinates."""

    def test_empty(self):
        assert layout([], []) == []

    def test_single_person(self):
        assert layout(people("A"), []) == [LayoutPosition("A", 0.0, 0.0)]

    def test_parent_centered_over_children(self):
        result = coords(layout(
            people("A", "B", "C"),
            [Relation.parent_child("A", "B"), Relation.parent_child("A", "C")],
        ))

        assert result["A"] == (pytest.approx(0.0), 0.0)
        assert result["B"] == (pytest.approx(-125.0), 220.0)
        assert result["C"] == (pytest.approx(125.0), 220.0)

    def test_couple_with_child(self):
        """Spouses sit side by side with the child centered below."""
        result = coords(layout(
            people("A", "D", "B"),
            [Relation.spouse("A", "D"), Relation.parent_child("A", "B")],
        ))

        assert result["A"] == (pytest.approx(-105.0), 0.0)
        assert result["D"] == (pytest.approx(105.0), 0.0)
        assert result["B"] == (pytest.approx(0.0), 220.0)

    def test_disconnected_roots_separated(self):
        """Root families are two horizontal gaps apart."""
        result = coords(layout(people("A", "B"), []))
        assert result["A"][0] == pytest.approx(-175.0)
        assert result["B"][0] == pytest.approx(175.0)

    def test_centered_on_zero(self):
        relations = [
            Relation.parent_child("A", "B"),
            Relation.parent_child("A", "C"),
            Relation.spouse("B", "E"),
            Relation.parent_child("B", "F"),
        ]
        xs = [p.x for p in layout(people("A", "B", "C", "E", "F", "G"), relations)]
        assert min(xs) + max(xs) == pytest.approx(0.0)

    def test_married_in_spouse_row(self):
        result = coords(layout(
            people("P", "C", "S"),
            [Relation.parent_child("P", "C"), Relation.spouse("C", "S")],
        ))
        assert result["S"][1] == 220.0
        assert result["S"][0] - result["C"][0] == pytest.approx(150 + 60)

    def test_cycle_still_positions_everyone(self):
        result = coords(layout(
            people("A", "B"),
            [Relation.parent_child("A", "B"), Relation.parent_child("B", "A")],
        ))
        assert result == {"A": (pytest.approx(-125.0), 0.0), "B": (pytest.approx(125.0), 0.0)}

    def test_one_entry_per_person_in_input_order(self):
        persons = people("C", "A", "B") + [Person(id="A", first_name="Again")]
        relations = [Relation.parent_child("A", "B"), Relation.parent_child("A", "ghost")]
        assert [p.person_id for p in layout(persons, relations)] == ["C", "A", "B"]

    def test_deterministic(self):
        persons = people("A", "B", "C", "D", "E")
        relations = [
            Relation.parent_child("A", "B"),
            Relation.spouse("A", "D"),
            Relation.parent_child("D", "C"),
            Relation.sibling("B", "E"),
        ]
        assert layout(persons, relations) == layout(persons, relations)

    def test_accepts_mappings(self):
        result = layout(
            [{"id": "A", "first_name": "A"}, {"id": "B", "first_name": "B"}],
            [{"person1_id": "A", "person2_id": "B", "relation_type": "parent_child"}],
        )
        assert coords(result) == {"A": (0.0, 0.0), "B": (0.0, 220.0)}

    def test_very_deep_line(self):
        """Thousands of generations lay out without hitting the recursion limit."""
        depth = 3000
        ids = [f"P{i}" for i in range(depth)]
        relations = [Relation.parent_child(ids[i], ids[i + 1]) for i in range(depth - 1)]

        result = layout(people(*ids), relations)

        assert len(result) == depth
        assert all(p.x == 0.0 for p in result)
        assert result[-1].y == (depth - 1) * 220.0

    def test_loose_person_records_still_positioned(self):
        """A null first name or a numeric id does not cost the person a node."""
        result = layout(
            [{"id": "A", "first_name": None}, {"id": "B", "first_name": "Bob"}, {"id": 7, "first_name": "C"}],
            [],
        )
        assert [p.person_id for p in result] == ["A", "B", "7"]

    def test_custom_spacing(self):
        config = LayoutConfig(vertical_spacing=100.0)
        result = coords(layout(people("A", "B"), [Relation.parent_child("A", "B")], config=config))
        assert result["B"][1] == 100.0

    def test_unknown_style_falls_back_to_classic(self):
        persons = people("A", "B")
        relations = [Relation.parent_child("A", "B")]
        assert layout(persons, relations, style="fancy") == layout(persons, relations, style=LayoutStyle.CLASSIC)


class TestMergePositions:
    """Tests for manual position overrides."""

    def test_dragged_person_keeps_stored_position(self):
        persons = [
            Person(id="A", first_name="A", position_x=500.0, position_y=40.0),
            Person(id="B", first_name="B", position_x=1.0, position_y=2.0),
        ]
        computed = layout(persons, [Relation.parent_child("A", "B")])

        merged = coords(merge_positions(computed, persons, dragged_ids=["A"]))

        assert merged["A"] == (500.0, 40.0)
        assert merged["B"] == (0.0, 220.0)

    def test_stored_coordinates_used_by_default(self):
        persons = [Person(id="A", position_x=5.0, position_y=6.0), Person(id="B")]
        computed = [LayoutPosition("A", 0.0, 0.0), LayoutPosition("B", 10.0, 0.0)]

        merged = merge_positions(computed, persons)

        assert merged == [LayoutPosition("A", 5.0, 6.0), LayoutPosition("B", 10.0, 0.0)]

    def test_no_dragged_ids(self):
        persons = [Person(id="A", position_x=5.0, position_y=6.0)]
        computed = [LayoutPosition("A", 0.0, 0.0)]
        assert merge_positions(computed, persons, dragged_ids=[]) == computed
