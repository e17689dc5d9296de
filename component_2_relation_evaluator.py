"""
Component 2: Relation Evaluator

Pure functions deciding whether a spatial relation holds in a world state.

Relations between two objects A and B are evaluated from their positions
(column, height). The floor counts as heightless ground under A's column, so
"A ontop floor" means A is at the bottom of its stack. A held object has no
position and only takes part in the unary 'holding' relation.

Author: Stack Planner Team
Date: 2026-10-19
"""

from typing import Optional, Tuple

from common.constants import (
    CROSS_STACK_RELATIONS,
    FLOOR_HEIGHT,
    FLOOR_ID,
    RELATION_HOLDING,
    SAME_STACK_RELATIONS,
)
from component_1_world_model import WorldState

Position = Tuple[int, int]


def object_position(world: WorldState, object_id: str) -> Optional[Position]:
    """(column, height) of a stacked object, None when held or absent."""
    return world.locate(object_id)


def objects_above(world: WorldState, object_id: str) -> int:
    """
    Number of objects stacked on top of an object.

    Held (or absent) objects have nothing on top of them.
    """
    position = world.locate(object_id)
    if position is None:
        return 0
    column, height = position
    return len(world.stacks[column]) - height - 1


def binary_positions(
    world: WorldState, subject: str, target: str
) -> Tuple[Optional[Position], Optional[Position]]:
    """
    Positions of the two arguments of a binary relation.

    The floor takes the subject's column at FLOOR_HEIGHT; it has no position
    if the subject itself is not placed.
    """
    pos_a = world.locate(subject)
    if target == FLOOR_ID:
        pos_b = (pos_a[0], FLOOR_HEIGHT) if pos_a is not None else None
    else:
        pos_b = world.locate(target)
    return pos_a, pos_b


def is_holding(world: WorldState, object_id: str) -> bool:
    return world.holding is not None and world.holding == object_id


def check_binary_relation(
    world: WorldState, relation: str, subject: str, target: str
) -> bool:
    """
    Decide a binary relation between two objects.

    Same column (or target is the floor):
        ontop / inside: subject is exactly one above target
        above: subject is higher than target
        under: subject is lower than target
    Different columns:
        beside: columns differ by exactly one
        leftof / rightof: subject's column is smaller / larger

    Args:
        world: World snapshot
        relation: Relation name
        subject: First argument (A)
        target: Second argument (B), may be 'floor'

    Returns:
        True if the relation holds
    """
    pos_a, pos_b = binary_positions(world, subject, target)
    if pos_a is None or pos_b is None:
        return False

    (col_a, height_a), (col_b, height_b) = pos_a, pos_b

    if target == FLOOR_ID or col_a == col_b:
        if relation in ("ontop", "inside"):
            return height_a == height_b + 1
        if relation == "above":
            return height_a > height_b
        if relation == "under":
            return height_a < height_b
        return False

    if relation == "beside":
        return abs(col_a - col_b) == 1
    if relation == "leftof":
        return col_a < col_b
    if relation == "rightof":
        return col_a > col_b
    return False


def check_relation(world: WorldState, relation: str, *args: str) -> bool:
    """
    Decide a unary or binary relation.

    Unknown relations and wrong arities evaluate to False; goal formulas are
    validated before they reach this point.
    """
    if len(args) == 1:
        return relation == RELATION_HOLDING and is_holding(world, args[0])
    if len(args) == 2 and relation in SAME_STACK_RELATIONS | CROSS_STACK_RELATIONS:
        return check_binary_relation(world, relation, args[0], args[1])
    return False
