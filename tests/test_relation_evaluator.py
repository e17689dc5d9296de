"""
tests/test_relation_evaluator.py

Unit tests for spatial relation evaluation.

Tests cover:
- Same-stack relations (ontop, inside, above, under)
- Relations against the floor
- Cross-stack relations (beside, leftof, rightof)
- Held objects and the unary holding relation
"""

import pytest

from component_1_world_model import ObjectDescriptor, ObjectForm, ObjectSize, WorldState
from component_2_relation_evaluator import (
    check_binary_relation,
    check_relation,
    objects_above,
)


def small_brick() -> ObjectDescriptor:
    return ObjectDescriptor(ObjectForm.BRICK, ObjectSize.SMALL, "green")


@pytest.fixture
def world():
    """
    Stacks (bottom to top):
        0: a b c
        1: d
        2: (empty)
        3: e
    Holding: h
    """
    objects = {name: small_brick() for name in "abcdeh"}
    return WorldState(
        arm=0,
        holding="h",
        stacks=[["a", "b", "c"], ["d"], [], ["e"]],
        objects=objects,
    )


class TestSameStackRelations:
    """Relations between objects of one stack."""

    def test_ontop_directly_above(self, world):
        assert check_binary_relation(world, "ontop", "b", "a")
        assert not check_binary_relation(world, "ontop", "c", "a")
        assert not check_binary_relation(world, "ontop", "a", "b")

    def test_inside_behaves_like_ontop(self, world):
        assert check_binary_relation(world, "inside", "c", "b")
        assert not check_binary_relation(world, "inside", "c", "a")

    def test_above(self, world):
        assert check_binary_relation(world, "above", "c", "a")
        assert not check_binary_relation(world, "above", "a", "c")

    def test_under(self, world):
        assert check_binary_relation(world, "under", "a", "c")
        assert not check_binary_relation(world, "under", "c", "b")

    def test_cross_relations_fail_in_same_stack(self, world):
        assert not check_binary_relation(world, "beside", "a", "b")
        assert not check_binary_relation(world, "leftof", "a", "b")


class TestFloorRelations:
    """The floor is ground under the subject's stack."""

    def test_bottom_object_is_on_floor(self, world):
        assert check_binary_relation(world, "ontop", "a", "floor")
        assert check_binary_relation(world, "ontop", "d", "floor")

    def test_higher_object_is_not_on_floor(self, world):
        assert not check_binary_relation(world, "ontop", "b", "floor")

    def test_every_placed_object_is_above_floor(self, world):
        assert check_binary_relation(world, "above", "c", "floor")
        assert check_binary_relation(world, "above", "a", "floor")

    def test_nothing_is_under_floor(self, world):
        assert not check_binary_relation(world, "under", "a", "floor")

    def test_floor_has_no_cross_relations(self, world):
        assert not check_binary_relation(world, "beside", "a", "floor")


class TestCrossStackRelations:
    """Relations between objects of different stacks."""

    def test_beside(self, world):
        assert check_binary_relation(world, "beside", "a", "d")
        assert check_binary_relation(world, "beside", "d", "c")
        assert not check_binary_relation(world, "beside", "a", "e")

    def test_leftof(self, world):
        assert check_binary_relation(world, "leftof", "b", "e")
        assert not check_binary_relation(world, "leftof", "e", "b")

    def test_rightof(self, world):
        assert check_binary_relation(world, "rightof", "e", "d")
        assert not check_binary_relation(world, "rightof", "a", "d")

    def test_same_stack_relations_fail_across_stacks(self, world):
        assert not check_binary_relation(world, "above", "e", "a")
        assert not check_binary_relation(world, "ontop", "d", "a")


class TestHeldObjects:
    """A held object has no position."""

    def test_holding(self, world):
        assert check_relation(world, "holding", "h")
        assert not check_relation(world, "holding", "a")

    def test_held_object_has_no_binary_relations(self, world):
        assert not check_binary_relation(world, "ontop", "h", "floor")
        assert not check_binary_relation(world, "leftof", "h", "e")
        assert not check_binary_relation(world, "rightof", "e", "h")

    def test_nothing_held(self, world):
        world.holding = None
        assert not check_relation(world, "holding", "h")


class TestHelpers:
    """objects_above and check_relation dispatch."""

    def test_objects_above(self, world):
        assert objects_above(world, "a") == 2
        assert objects_above(world, "c") == 0
        assert objects_above(world, "h") == 0

    def test_check_relation_binary(self, world):
        assert check_relation(world, "ontop", "b", "a")

    def test_check_relation_rejects_unknown(self, world):
        assert not check_relation(world, "near", "a", "b")
        assert not check_relation(world, "ontop", "a")
