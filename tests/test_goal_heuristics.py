"""
tests/test_goal_heuristics.py

Unit tests for the goal test and heuristic.

Tests cover:
- Goal satisfaction for conjunctions and disjunctions
- Literal estimates for every positional case
- Max over conjunctions, min over disjunctions
- Displacement cost scaling and memoization
"""

import pytest

from component_1_world_model import ObjectDescriptor, ObjectForm, ObjectSize, WorldState
from component_3_search_node import SearchNode
from component_5_goal_formula import parse_formula, parse_literal
from component_6_goal_heuristics import CompiledGoal, compile_goal, literal_estimate
from planner_exceptions import InvalidConfigError


@pytest.fixture
def world():
    """
    Stacks (bottom to top):
        0: a b c
        1: d e
        2: (empty)
    """
    plank = ObjectDescriptor(ObjectForm.PLANK, ObjectSize.SMALL, "black")
    return WorldState(
        arm=0,
        holding=None,
        stacks=[["a", "b", "c"], ["d", "e"], []],
        objects={name: plank for name in "abcdeh"},
    )


def estimate(text: str, world: WorldState, displacement_cost: int = 4) -> float:
    return compile_goal(parse_formula(text), displacement_cost).estimate(
        SearchNode(world)
    )


class TestGoalTest:
    """Satisfaction of compiled formulas."""

    def test_conjunction_needs_all_literals(self, world):
        goal = compile_goal(parse_formula("ontop(b,a) & ontop(e,d)"))
        assert goal.holds_in(world)

        goal = compile_goal(parse_formula("ontop(b,a) & ontop(d,e)"))
        assert not goal.holds_in(world)

    def test_disjunction_needs_one_conjunction(self, world):
        goal = compile_goal(parse_formula("ontop(d,e) | leftof(a,d)"))
        assert goal.holds_in(world)

    def test_is_satisfied_reads_node_state(self, world):
        goal = compile_goal(parse_formula("holding(c)"))
        node = SearchNode(world)
        assert not goal.is_satisfied(node)
        assert goal.is_satisfied(node.neighbor("p"))


class TestLiteralEstimates:
    """Per-literal estimates with the default displacement cost."""

    def test_holding_counts_objects_above(self, world):
        assert estimate("holding(a)", world) == 8
        assert estimate("holding(c)", world) == 0

    def test_held_object_needs_nothing(self, world):
        world.holding = "h"
        assert estimate("holding(h)", world) == 0

    def test_different_stacks_sum(self, world):
        # two objects above a, one above d
        assert estimate("ontop(a,d)", world) == 12

    def test_floor_target(self, world):
        assert estimate("ontop(a,floor)", world) == 0
        assert estimate("ontop(b,floor)", world) == 4

    def test_same_stack_takes_smaller_pile(self, world):
        assert estimate("ontop(a,b)", world) == 4

    def test_satisfied_literals_are_free(self, world):
        assert estimate("above(c,a)", world) == 0
        assert estimate("leftof(b,e)", world) == 0
        assert estimate("beside(c,d)", world) == 0

    def test_single_displacement_costs_the_constant(self, world):
        # one object (e) on top of d, c is free
        assert estimate("ontop(c,d)", world) == 4

    def test_held_subject_counts_as_other_stack(self, world):
        world.holding = "h"
        assert estimate("ontop(h,d)", world) == 4
        assert estimate("ontop(h,floor)", world) == 0

    def test_literal_estimate_direct(self, world):
        assert literal_estimate(parse_literal("ontop(a,d)"), world, 1) == 3.0


class TestCombination:
    """Max over conjunctions, min over disjunctions."""

    def test_conjunction_takes_maximum(self, world):
        assert estimate("holding(a) & ontop(a,d)", world) == 12

    def test_disjunction_takes_minimum(self, world):
        assert estimate("holding(a) | ontop(b,floor)", world) == 4

    def test_satisfied_disjunct_gives_zero(self, world):
        assert estimate("holding(a) | ontop(b,a)", world) == 0


class TestCompiledGoal:
    """Displacement cost and memoization."""

    def test_displacement_cost_scales(self, world):
        assert estimate("ontop(a,d)", world, displacement_cost=2) == 6
        assert estimate("holding(b)", world, displacement_cost=1) == 1

    def test_invalid_displacement_cost(self):
        with pytest.raises(InvalidConfigError):
            CompiledGoal(parse_formula("holding(a)"), displacement_cost=0)

    def test_estimates_are_memoized(self, world):
        goal = compile_goal(parse_formula("holding(a)"))
        node = SearchNode(world)

        assert goal.cache_info()["size"] == 0
        goal.estimate(node)
        goal.estimate(SearchNode(world.copy()))
        assert goal.cache_info()["size"] == 1

        goal.estimate(node.neighbor("r"))
        assert goal.cache_info()["size"] == 2

    def test_cache_is_bounded(self, world):
        goal = compile_goal(parse_formula("holding(a)"), cache_size=1)
        node = SearchNode(world)
        goal.estimate(node)
        goal.estimate(node.neighbor("r"))
        assert goal.cache_info() == {"size": 1, "maxsize": 1}
