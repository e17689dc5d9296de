"""
Component 7: Planner

Top-level planning driver. Takes the interpretations produced by the
interpreter and plans, for each of them, a sequence of arm actions that puts
the world into a state satisfying the interpretation's goal formula.

- Interpretation / PlannerResult: Input and output of the driver
- PlanOutcome: Tagged result of one planning attempt
- Planner: Per-world driver (also usable as a BaseReasoningEngine)
- plan: Convenience entry point
- simulate_plan / validate_plan: Replay a plan on a world

Author: Stack Planner Team
Date: 2026-10-19
"""

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from common.constants import NO_PATH_MESSAGE
from component_1_world_model import WorldState
from component_3_search_node import SearchNode, StackWorldGraph
from component_4_graph_search import SearchStatus, astar_search
from component_5_goal_formula import DNFFormula, parse_formula
from component_6_goal_heuristics import CompiledGoal, compile_goal
from component_8_logging_config import (
    PerformanceLogger,
    get_logger,
    log_component_end,
    log_component_error,
    log_component_start,
    setup_logging,
)
from infrastructure.interfaces import BaseReasoningEngine, ReasoningResult
from planner_config import PlannerConfig, get_config
from planner_exceptions import (
    AggregatePlanningError,
    GoalException,
    IllegalActionError,
    PlannerException,
    SearchBudgetExceededError,
    UnreachableGoalError,
)

logger = get_logger(__name__)


# ============================================================================
# Data Structures
# ============================================================================


@dataclass
class Interpretation:
    """
    One candidate reading of the user's command.

    Attributes:
        formula: Goal formula to achieve
        metadata: Opaque upstream data (parse tree, utterance, ...)
    """

    formula: DNFFormula
    metadata: Any = None


@dataclass
class PlannerResult:
    """An interpretation together with the plan found for it."""

    interpretation: Interpretation
    plan: List[str]


class PlanStatus(Enum):
    """Outcome of planning a single interpretation."""

    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"
    INVALID_GOAL = "invalid_goal"


@dataclass
class PlanOutcome:
    """
    Result of one planning attempt.

    Attributes:
        status: Outcome tag
        actions: Action labels (empty unless SUCCESS; empty on SUCCESS means
                 the goal already holds)
        error: Failure description (None on SUCCESS)
        visited: Number of nodes expanded by the search
        cause: Exception behind an INVALID_GOAL outcome
    """

    status: PlanStatus
    actions: List[str] = field(default_factory=list)
    error: Optional[str] = None
    visited: int = 0
    cause: Optional[PlannerException] = None

    @property
    def success(self) -> bool:
        return self.status == PlanStatus.SUCCESS

    def to_exception(self) -> Optional[PlannerException]:
        """Exception equivalent of a failed outcome, None on success."""
        if self.status == PlanStatus.SUCCESS:
            return None
        if self.status == PlanStatus.TIMEOUT:
            return SearchBudgetExceededError(self.error, visited=self.visited)
        if self.status == PlanStatus.INVALID_GOAL and self.cause is not None:
            return self.cause
        return UnreachableGoalError(self.error, context={"visited": self.visited})


InterpretationLike = Union[Interpretation, DNFFormula, str, Tuple[Any, Any]]


def as_interpretation(item: InterpretationLike) -> Interpretation:
    """
    Normalize driver input.

    Accepts an Interpretation, a DNFFormula, the textual notation, or a
    (formula, metadata) pair.
    """
    if isinstance(item, Interpretation):
        return item
    if isinstance(item, tuple):
        formula, metadata = item
        return Interpretation(formula=_as_formula(formula), metadata=metadata)
    return Interpretation(formula=_as_formula(item))


def _as_formula(formula: Union[DNFFormula, str, Dict[str, Any]]) -> DNFFormula:
    if isinstance(formula, DNFFormula):
        return formula
    if isinstance(formula, str):
        return parse_formula(formula)
    return DNFFormula.from_dict(formula)


# ============================================================================
# Planner
# ============================================================================


class Planner(BaseReasoningEngine):
    """
    Plans action sequences for goal formulas in a fixed world.

    The world is never mutated: each attempt starts from its own copy.

    Usage:
        planner = Planner(world)
        results = planner.plan([Interpretation(parse_formula("holding(a)"))])
        print(results[0].plan)  # ['p']
    """

    def __init__(self, world: WorldState, config: Optional[PlannerConfig] = None):
        self.world = world
        self.config = config or get_config()
        self.graph = StackWorldGraph()
        self.stats = {"attempts": 0, "succeeded": 0, "max_visited": 0}

    def _compile(self, formula: DNFFormula) -> CompiledGoal:
        return compile_goal(
            formula,
            displacement_cost=self.config.displacement_cost,
            cache_size=self.config.heuristic_cache_size,
        )

    def make_plan(self, formula: DNFFormula) -> PlanOutcome:
        """
        Plan a single goal formula.

        Args:
            formula: Goal to achieve

        Returns:
            PlanOutcome (never raises for unreachable goals or timeouts)
        """
        try:
            formula.validate_against(self.world)
        except GoalException as e:
            logger.warning(f"Invalid goal '{formula}': {e.message}")
            return PlanOutcome(status=PlanStatus.INVALID_GOAL, error=e.message, cause=e)

        goal = self._compile(formula)
        start = SearchNode.from_world(self.world)
        budget = self.config.expansion_budget

        result = astar_search(
            self.graph, start, goal.is_satisfied, goal.estimate, budget
        )

        if result.status == SearchStatus.TIMEOUT:
            message = (
                f"TIMEOUT! Visited {result.visited} nodes "
                f"(expansion budget {budget})"
            )
            logger.warning(message, extra={"goal": str(formula)})
            return PlanOutcome(
                status=PlanStatus.TIMEOUT, error=message, visited=result.visited
            )

        if result.status == SearchStatus.FAILURE:
            logger.info(
                NO_PATH_MESSAGE,
                extra={"goal": str(formula), "visited": result.visited},
            )
            return PlanOutcome(
                status=PlanStatus.FAILURE, error=NO_PATH_MESSAGE, visited=result.visited
            )

        logger.info(
            f"Plan found! Length: {len(result.path)}, Expansions: {result.visited}",
            extra={"goal": str(formula)},
        )
        return PlanOutcome(
            status=PlanStatus.SUCCESS, actions=result.actions, visited=result.visited
        )

    def plan(self, interpretations: Sequence[InterpretationLike]) -> List[PlannerResult]:
        """
        Plan every interpretation and keep the ones that succeed.

        Args:
            interpretations: Candidate interpretations, tried in order

        Returns:
            One PlannerResult per interpretation that yielded a plan

        Raises:
            AggregatePlanningError: If no interpretation yielded a plan; the
                message joins every per-interpretation error
        """
        log_component_start(logger, "planning", interpretations=len(interpretations))

        errors: List[str] = []
        plans: List[PlannerResult] = []

        for index, item in enumerate(interpretations):
            self.stats["attempts"] += 1
            try:
                interpretation = as_interpretation(item)
            except GoalException as e:
                logger.warning(f"Unreadable interpretation #{index}: {e.message}")
                errors.append(f"{item}: {e.message}")
                continue

            with PerformanceLogger(
                logger.logger, "Plan interpretation", index=index
            ):
                outcome = self.make_plan(interpretation.formula)

            self.stats["max_visited"] = max(self.stats["max_visited"], outcome.visited)

            if not outcome.success:
                errors.append(f"{interpretation.formula}: {outcome.error}")
                continue

            actions = list(outcome.actions)
            if not actions:
                actions.append(self.config.already_true_message)

            self.stats["succeeded"] += 1
            plans.append(PlannerResult(interpretation=interpretation, plan=actions))

        if not plans:
            raise AggregatePlanningError(
                self.config.error_separator.join(errors), errors=errors
            )

        log_component_end(
            logger, "planning", succeeded=len(plans), failed=len(errors)
        )
        return plans

    # ========================================================================
    # BaseReasoningEngine Interface Implementation
    # ========================================================================

    def reason(self, query: str, context: Dict[str, Any]) -> ReasoningResult:
        """
        Plan the interpretations found in the context.

        Context must contain:
        - 'interpretations': list accepted by plan()
        Optional:
        - 'world': WorldState or world dict replacing this planner's world

        Args:
            query: The user's utterance (only used for logging)
            context: Planning inputs

        Returns:
            ReasoningResult with the plans in metadata["plans"]
        """
        interpretations = context.get("interpretations")
        if not interpretations:
            return ReasoningResult(
                success=False,
                answer="No interpretations provided in context",
                strategy_used="stack_world_astar",
                metadata={"error": "missing_interpretations"},
            )

        world = context.get("world")
        if world is not None and not isinstance(world, WorldState):
            world = WorldState.from_dict(world)
        planner = Planner(world, self.config) if world is not None else self

        logger.debug(f"Planning for query: {query}")
        try:
            results = planner.plan(interpretations)
        except AggregatePlanningError as e:
            return ReasoningResult(
                success=False,
                answer=e.message,
                strategy_used="stack_world_astar",
                computation_cost=planner._budget_share(),
                metadata={"errors": e.errors},
            )

        return ReasoningResult(
            success=True,
            answer=f"Planned {len(results)} interpretation(s)",
            confidence=1.0,
            strategy_used="stack_world_astar",
            computation_cost=planner._budget_share(),
            metadata={
                "plans": [
                    {
                        "goal": str(result.interpretation.formula),
                        "metadata": result.interpretation.metadata,
                        "plan": result.plan,
                    }
                    for result in results
                ],
            },
        )

    def _budget_share(self) -> float:
        return min(1.0, self.stats["max_visited"] / self.config.expansion_budget)

    def get_capabilities(self) -> List[str]:
        return [
            "planning",
            "stack_world",
            "astar_search",
            "heuristic_search",
            "multi_interpretation",
            "plan_validation",
        ]

    def estimate_cost(self, query: str) -> float:
        # Search cost depends on the world, not on the query text
        return 0.6


# ============================================================================
# Convenience Functions
# ============================================================================


def plan(
    interpretations: Sequence[InterpretationLike],
    world: WorldState,
    config: Optional[PlannerConfig] = None,
) -> List[PlannerResult]:
    """
    Plan a list of interpretations in a world.

    See Planner.plan for results and errors.
    """
    return Planner(world, config).plan(interpretations)


def simulate_plan(world: WorldState, actions: Sequence[str]) -> List[WorldState]:
    """
    Execute a plan and return the state trajectory.

    Args:
        world: Start world (not modified)
        actions: Action labels

    Returns:
        List of worlds, starting with a copy of the start world

    Raises:
        IllegalActionError: If an action cannot be applied
    """
    node = SearchNode.from_world(world)
    trajectory = [node.state.copy()]
    for action in actions:
        node = node.apply(action)
        trajectory.append(node.state.copy())
    return trajectory


def validate_plan(
    world: WorldState,
    formula: DNFFormula,
    actions: Sequence[str],
) -> Tuple[bool, Optional[str]]:
    """
    Check that a plan is executable and achieves the formula.

    Returns:
        (success, error_message)
    """
    try:
        final = simulate_plan(world, actions)[-1]
    except IllegalActionError as e:
        return False, str(e)

    if not CompiledGoal(formula).holds_in(final):
        return False, "Final state does not satisfy goal"

    return True, None


def main():
    """Example usage: plan two readings of a command in a small world."""
    config = get_config()
    setup_logging(
        console_level=logging.getLevelName(config.log_level),
        enable_file_logging=False,
        enable_performance_logging=False,
    )

    world = WorldState.from_dict(
        {
            "arm": 0,
            "holding": None,
            "stacks": [["e"], ["g", "l"], [], ["k", "m", "f"], []],
            "objects": {
                "e": {"form": "ball", "size": "large", "color": "white"},
                "f": {"form": "ball", "size": "small", "color": "black"},
                "g": {"form": "table", "size": "large", "color": "blue"},
                "k": {"form": "pyramid", "size": "large", "color": "yellow"},
                "l": {"form": "box", "size": "large", "color": "red"},
                "m": {"form": "box", "size": "small", "color": "blue"},
            },
        }
    )

    goals = sys.argv[1:] or ["inside(f,l)", "holding(f)"]

    print(world.to_string())
    try:
        for result in plan(goals, world, config):
            print(f"{result.interpretation.formula}: {' '.join(result.plan)}")
    except AggregatePlanningError as e:
        log_component_error(logger, "planning", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
