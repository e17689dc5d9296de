"""
Component 6: Goal Test and Heuristic

Compiles a DNFFormula into a goal test and a distance estimate over search
nodes.

Goal test:
    A node satisfies the formula if every literal of at least one
    conjunction holds in its world.

Heuristic:
    literal     0 if it holds, otherwise displacement_cost times the number
                of objects that have to be moved out of the way
    conjunction maximum over its literals
    disjunction minimum over its conjunctions

Author: Stack Planner Team
Date: 2026-10-19
"""

from typing import Optional

from cachetools import LRUCache

from common.constants import (
    DEFAULT_DISPLACEMENT_COST,
    DEFAULT_HEURISTIC_CACHE_SIZE,
    FLOOR_ID,
    RELATION_HOLDING,
)
from component_1_world_model import WorldState
from component_2_relation_evaluator import (
    check_binary_relation,
    check_relation,
    is_holding,
    objects_above,
)
from component_3_search_node import SearchNode
from component_5_goal_formula import Conjunction, DNFFormula, Literal
from planner_exceptions import InvalidConfigError

# ============================================================================
# Literal Level
# ============================================================================


def literal_holds(literal: Literal, world: WorldState) -> bool:
    return check_relation(world, literal.relation, *literal.args)


def literal_estimate(
    literal: Literal, world: WorldState, displacement_cost: int
) -> float:
    """
    Lower-bound style estimate for a single literal.

    holding(A): objects above A
    binary, same stack: fewer of the objects above A or above B
    binary, different stacks, B is the floor: objects above A
    binary, different stacks: objects above A plus objects above B

    A held object counts as being in a different stack with nothing on top.
    """
    if literal.relation == RELATION_HOLDING:
        target = literal.args[0]
        if is_holding(world, target):
            return 0.0
        return float(displacement_cost * objects_above(world, target))

    subject, target = literal.args
    if check_binary_relation(world, literal.relation, subject, target):
        return 0.0

    above_a = objects_above(world, subject)
    pos_a = world.locate(subject)

    if target == FLOOR_ID:
        return float(displacement_cost * above_a)

    above_b = objects_above(world, target)
    pos_b = world.locate(target)

    if pos_a is not None and pos_b is not None and pos_a[0] == pos_b[0]:
        return float(displacement_cost * min(above_a, above_b))
    return float(displacement_cost * (above_a + above_b))


# ============================================================================
# Compiled Goal
# ============================================================================


class CompiledGoal:
    """
    Goal test and heuristic for one formula.

    Estimates are memoized per node identity in a bounded LRU cache. A
    compiled goal belongs to one planning attempt; nothing is shared between
    attempts.

    Usage:
        goal = CompiledGoal(parse_formula("holding(a)"))
        result = astar_search(graph, start, goal.is_satisfied, goal.estimate, 1000)
    """

    def __init__(
        self,
        formula: DNFFormula,
        displacement_cost: int = DEFAULT_DISPLACEMENT_COST,
        cache_size: int = DEFAULT_HEURISTIC_CACHE_SIZE,
    ):
        if displacement_cost < 1:
            raise InvalidConfigError(
                f"displacement_cost must be >= 1, got {displacement_cost}"
            )
        self.formula = formula
        self.displacement_cost = displacement_cost
        self._estimates: LRUCache = LRUCache(maxsize=cache_size)

    # ------------------------------------------------------------------
    # Goal test
    # ------------------------------------------------------------------

    def conjunction_holds(self, conj: Conjunction, world: WorldState) -> bool:
        return all(literal_holds(lit, world) for lit in conj.literals)

    def holds_in(self, world: WorldState) -> bool:
        """True if any conjunction is fully satisfied in the world."""
        return any(self.conjunction_holds(conj, world) for conj in self.formula.conjuncts)

    def is_satisfied(self, node: SearchNode) -> bool:
        return self.holds_in(node.state)

    # ------------------------------------------------------------------
    # Heuristic
    # ------------------------------------------------------------------

    def conjunction_estimate(self, conj: Conjunction, world: WorldState) -> float:
        return max(
            literal_estimate(lit, world, self.displacement_cost)
            for lit in conj.literals
        )

    def estimate_world(self, world: WorldState) -> float:
        return min(
            self.conjunction_estimate(conj, world) for conj in self.formula.conjuncts
        )

    def estimate(self, node: SearchNode) -> float:
        """Heuristic value of a node (memoized by identity)."""
        cached: Optional[float] = self._estimates.get(node.id)
        if cached is not None:
            return cached
        value = self.estimate_world(node.state)
        self._estimates[node.id] = value
        return value

    def cache_info(self) -> dict:
        return {"size": self._estimates.currsize, "maxsize": self._estimates.maxsize}


def compile_goal(
    formula: DNFFormula,
    displacement_cost: int = DEFAULT_DISPLACEMENT_COST,
    cache_size: int = DEFAULT_HEURISTIC_CACHE_SIZE,
) -> CompiledGoal:
    """Build the goal test and heuristic for a formula."""
    return CompiledGoal(formula, displacement_cost=displacement_cost, cache_size=cache_size)
