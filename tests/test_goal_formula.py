"""
tests/test_goal_formula.py

Unit tests for goal formulas.

Tests cover:
- Parsing the textual DNF notation
- Arity and relation checks
- The upstream dict shape
- Validation against a world
"""

import pytest

from component_1_world_model import ObjectDescriptor, ObjectForm, ObjectSize, WorldState
from component_5_goal_formula import (
    Conjunction,
    DNFFormula,
    Literal,
    parse_formula,
    parse_literal,
)
from planner_exceptions import (
    GoalException,
    InvalidGoalFormulaError,
    UnknownObjectError,
    UnknownRelationError,
)


@pytest.fixture
def world():
    brick = ObjectDescriptor(ObjectForm.BRICK, ObjectSize.LARGE, "green")
    return WorldState(
        arm=0,
        holding="c",
        stacks=[["a"], ["b"]],
        objects={"a": brick, "b": brick, "c": brick, "unplaced": brick},
    )


class TestParsing:
    """Textual notation."""

    def test_single_literal(self):
        formula = parse_formula("holding(a)")
        assert len(formula.conjuncts) == 1
        assert formula.conjuncts[0].literals == (Literal("holding", ("a",)),)

    def test_precedence(self):
        formula = parse_formula("ontop(a,floor) & holding(b) | inside(c,d)")

        assert len(formula.conjuncts) == 2
        assert [str(lit) for lit in formula.conjuncts[0].literals] == [
            "ontop(a,floor)",
            "holding(b)",
        ]
        assert str(formula.conjuncts[1]) == "inside(c,d)"

    def test_whitespace_is_ignored(self):
        formula = parse_formula("  ontop( a , floor )&holding(b)  ")
        assert str(formula) == "ontop(a,floor) & holding(b)"

    def test_str_matches_input_notation(self):
        text = "ontop(a,floor) & holding(b) | inside(c,d)"
        assert str(parse_formula(text)) == text

    def test_parse_literal(self):
        assert parse_literal("beside(x, y)") == Literal("beside", ("x", "y"))

    @pytest.mark.parametrize("text", ["", "   ", "holding(a) |", "ontop(a b)x", "holding"])
    def test_malformed(self, text):
        with pytest.raises(InvalidGoalFormulaError):
            parse_formula(text)

    def test_empty_argument(self):
        with pytest.raises(InvalidGoalFormulaError):
            parse_formula("ontop(a,)")


class TestLiteralChecks:
    """Relation names and arities."""

    def test_unknown_relation(self):
        with pytest.raises(UnknownRelationError) as exc_info:
            parse_formula("near(a,b)")
        assert exc_info.value.context["relation"] == "near"

    def test_unknown_relation_is_a_formula_error(self):
        with pytest.raises(InvalidGoalFormulaError):
            Literal("near", ("a", "b"))

    def test_binary_relation_needs_two_arguments(self):
        with pytest.raises(InvalidGoalFormulaError):
            parse_formula("ontop(a)")

    def test_holding_needs_one_argument(self):
        with pytest.raises(InvalidGoalFormulaError):
            parse_formula("holding(a,b)")

    def test_empty_conjunction_and_disjunction(self):
        with pytest.raises(InvalidGoalFormulaError):
            Conjunction(())
        with pytest.raises(InvalidGoalFormulaError):
            DNFFormula(())

    def test_literal_is_immutable(self):
        lit = Literal("holding", ("a",))
        with pytest.raises(AttributeError):
            lit.relation = "ontop"


class TestDictShape:
    """Upstream dict representation."""

    def test_from_dict(self):
        data = {
            "conjuncts": [
                {"literals": [{"relation": "ontop", "args": ["a", "floor"], "polarity": True}]},
                {"literals": [{"relation": "holding", "args": ["b"]}]},
            ]
        }
        formula = DNFFormula.from_dict(data)
        assert str(formula) == "ontop(a,floor) | holding(b)"

    def test_round_trip_through_dict(self):
        formula = parse_formula("ontop(a,b) & holding(c)")
        assert DNFFormula.from_dict(formula.to_dict()) == formula

    def test_negated_literal_rejected(self):
        data = {
            "conjuncts": [
                {"literals": [{"relation": "holding", "args": ["a"], "polarity": False}]}
            ]
        }
        with pytest.raises(InvalidGoalFormulaError):
            DNFFormula.from_dict(data)

    def test_malformed_dict(self):
        with pytest.raises(InvalidGoalFormulaError) as exc_info:
            DNFFormula.from_dict({"conjuncts": [{"lits": []}]})
        assert isinstance(exc_info.value.original_exception, KeyError)


class TestValidation:
    """Formulas against a concrete world."""

    def test_objects_in_world_pass(self, world):
        parse_formula("ontop(a,b) | holding(c) | ontop(c,floor)").validate_against(world)

    def test_unknown_object(self, world):
        with pytest.raises(UnknownObjectError) as exc_info:
            parse_formula("ontop(a,zz)").validate_against(world)
        assert exc_info.value.context["object_id"] == "zz"

    def test_described_but_absent_object(self, world):
        with pytest.raises(UnknownObjectError):
            parse_formula("holding(unplaced)").validate_against(world)

    def test_floor_as_subject(self, world):
        with pytest.raises(InvalidGoalFormulaError):
            parse_formula("ontop(floor,a)").validate_against(world)

    def test_errors_share_base_class(self, world):
        with pytest.raises(GoalException):
            parse_formula("holding(zz)").validate_against(world)

    def test_object_ids_exclude_floor(self):
        formula = parse_formula("ontop(a,floor) | beside(b,c)")
        assert formula.object_ids() == {"a", "b", "c"}
