"""
Component 3: Search Node and Move Generator

State model explored by the planner:
- is_valid_drop: Physical stacking rules
- encode_state_identity: Canonical identity of (arm, holding, stacks)
- SearchNode: Immutable world snapshot with successor generation
- StackWorldGraph: Graph adapter used by astar_search

Primitive actions, each with cost 1:
    l  move the arm one stack to the left
    r  move the arm one stack to the right
    p  pick up the top object of the stack under the arm
    d  drop the held object onto the stack under the arm

Author: Stack Planner Team
Date: 2026-10-19
"""

import json
from functools import total_ordering
from typing import List, Optional, Sequence

from common.constants import (
    ACTION_COST,
    ACTION_DROP,
    ACTION_LABELS,
    ACTION_LEFT,
    ACTION_PICK,
    ACTION_RIGHT,
)
from component_1_world_model import ObjectDescriptor, ObjectForm, ObjectSize, WorldState
from component_4_graph_search import Graph, Successor
from planner_exceptions import IllegalActionError

# ============================================================================
# Physical Rules
# ============================================================================

_BOX_SENSITIVE_FORMS = (ObjectForm.PYRAMID, ObjectForm.PLANK, ObjectForm.BOX)


def is_valid_drop(held: ObjectDescriptor, target: ObjectDescriptor) -> bool:
    """
    Check whether the held object may be dropped onto target.

    Args:
        held: Object in the arm (A)
        target: Top object of the destination stack, or the floor (B)

    Returns:
        True if the drop is physically legal
    """
    # Anything can be dropped on the floor.
    if target.form == ObjectForm.FLOOR:
        return True
    # Nothing can be dropped on a ball.
    if target.form == ObjectForm.BALL:
        return False
    # A ball can only go into a box (or onto the floor).
    if held.form == ObjectForm.BALL and target.form != ObjectForm.BOX:
        return False
    # Pyramids, planks and boxes do not fit into a box of the same size.
    if (
        held.form in _BOX_SENSITIVE_FORMS
        and target.form == ObjectForm.BOX
        and held.size == target.size
    ):
        return False
    # Large objects cannot be supported by small ones.
    if held.size == ObjectSize.LARGE and target.size == ObjectSize.SMALL:
        return False

    if held.form == ObjectForm.BOX and target.form in (
        ObjectForm.PYRAMID,
        ObjectForm.BRICK,
    ):
        # Small boxes cannot rest on small bricks or pyramids.
        if held.size == ObjectSize.SMALL and target.size == ObjectSize.SMALL:
            return False
        # Large boxes cannot rest on large pyramids.
        if (
            held.size == ObjectSize.LARGE
            and target.size == ObjectSize.LARGE
            and target.form == ObjectForm.PYRAMID
        ):
            return False

    return True


# ============================================================================
# Canonical Identity
# ============================================================================


def encode_state_identity(
    arm: int, holding: Optional[str], stacks: Sequence[Sequence[str]]
) -> str:
    """
    Canonical string identity of a state.

    Compact JSON of [arm, holding, stacks]. Equal identities mean equal
    (arm, holding, stacks); identifiers containing separators or quotes are
    escaped, so distinct states never collide.

    Example:
        >>> encode_state_identity(0, None, [["a", "b"], []])
        '[0,null,[["a","b"],[]]]'
    """
    return json.dumps(
        [arm, holding, [list(stack) for stack in stacks]],
        separators=(",", ":"),
        ensure_ascii=False,
    )


# ============================================================================
# Search Node
# ============================================================================


@total_ordering
class SearchNode:
    """
    Immutable snapshot of the world used as a search state.

    Every successor is built from a copy of this node's world, so the
    snapshot owned by a node is never changed after construction.

    Attributes:
        state: Owned world snapshot (treat as read-only)
        id: Canonical identity (see encode_state_identity)
    """

    __slots__ = ("state", "id")

    def __init__(self, state: WorldState):
        self.state = state
        self.id = encode_state_identity(state.arm, state.holding, state.stacks)

    @classmethod
    def from_world(cls, world: WorldState) -> "SearchNode":
        """Start node for a world; the caller's world is copied, not shared."""
        return cls(world.copy())

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"SearchNode({self.id})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SearchNode):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: "SearchNode") -> bool:
        if not isinstance(other, SearchNode):
            return NotImplemented
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def compare_to(self, other: "SearchNode") -> int:
        """Lexicographic comparison of identities (-1, 0 or 1)."""
        return (self.id > other.id) - (self.id < other.id)

    def neighbor(self, action: str) -> Optional["SearchNode"]:
        """
        Successor reached by one primitive action.

        Returns:
            The new node, or None if the action is illegal in this state
        """
        state = self.state
        column = state.arm

        if action == ACTION_LEFT:
            if column == 0:
                return None
            new_state = state.copy()
            new_state.arm -= 1
            return SearchNode(new_state)

        if action == ACTION_RIGHT:
            if column == state.stack_count - 1:
                return None
            new_state = state.copy()
            new_state.arm += 1
            return SearchNode(new_state)

        if action == ACTION_PICK:
            if state.holding is not None or not state.stacks[column]:
                return None
            new_state = state.copy()
            new_state.holding = new_state.stacks[column].pop()
            return SearchNode(new_state)

        if action == ACTION_DROP:
            if state.holding is None:
                return None
            held = state.descriptor(state.holding)
            target = state.descriptor(state.top_of(column))
            if not is_valid_drop(held, target):
                return None
            new_state = state.copy()
            new_state.stacks[column].append(new_state.holding)
            new_state.holding = None
            return SearchNode(new_state)

        return None

    def apply(self, action: str) -> "SearchNode":
        """
        Like neighbor(), but raises for illegal or unknown actions.

        Raises:
            IllegalActionError: If the action cannot be applied
        """
        if action not in ACTION_LABELS:
            raise IllegalActionError(f"Unknown action '{action}'", action=action)
        successor = self.neighbor(action)
        if successor is None:
            raise IllegalActionError(
                f"Action '{action}' is not applicable",
                action=action,
                context={"state": self.id},
            )
        return successor

    def successors(self) -> List[Successor["SearchNode"]]:
        """Legal successors in the fixed action order l, r, p, d."""
        outputs = []
        for action in ACTION_LABELS:
            child = self.neighbor(action)
            if child is not None:
                outputs.append(Successor(action=action, child=child, cost=ACTION_COST))
        return outputs


# ============================================================================
# Graph Adapter
# ============================================================================


class StackWorldGraph(Graph[SearchNode]):
    """Exposes SearchNode to astar_search."""

    def compare_nodes(self, a: SearchNode, b: SearchNode) -> int:
        return a.compare_to(b)

    def successors(self, current: SearchNode) -> List[Successor[SearchNode]]:
        return current.successors()
