"""
Centralized constants for the stack-world planner.

This module provides a single source of truth for the magic numbers and
fixed strings used throughout the planner. Components read their defaults
from here; runtime overrides go through planner_config.PlannerConfig.

Organization:
    - Actions: Primitive action labels and their cost
    - Object Vocabulary: Forms, sizes and the synthetic floor object
    - Relations: Relation names understood by the goal compiler
    - Search: Expansion budget and heuristic scaling
    - Driver Messages: Strings produced by the planning driver

Usage:
    from common.constants import ACTION_LABELS, DEFAULT_DISPLACEMENT_COST

Last Updated: 2026-10-19
"""

# =============================================================================
# Actions
# =============================================================================

ACTION_LEFT: str = "l"
ACTION_RIGHT: str = "r"
ACTION_PICK: str = "p"
ACTION_DROP: str = "d"

ACTION_LABELS: tuple = (ACTION_LEFT, ACTION_RIGHT, ACTION_PICK, ACTION_DROP)
"""
Order in which successors are generated.

The graph adapter evaluates the actions in exactly this order, which keeps
successor enumeration (and therefore tie handling in the search) deterministic.
"""

ACTION_COST: float = 1.0
"""Uniform cost of every primitive action."""

# =============================================================================
# Object Vocabulary
# =============================================================================

FLOOR_ID: str = "floor"
"""Reserved identifier of the synthetic floor object under every stack."""

FLOOR_HEIGHT: int = -1
"""Height assigned to the floor when evaluating relations against it."""

# =============================================================================
# Relations
# =============================================================================

RELATION_HOLDING: str = "holding"

SAME_STACK_RELATIONS: frozenset = frozenset({"ontop", "inside", "above", "under"})
CROSS_STACK_RELATIONS: frozenset = frozenset({"beside", "leftof", "rightof"})
BINARY_RELATIONS: frozenset = SAME_STACK_RELATIONS | CROSS_STACK_RELATIONS
UNARY_RELATIONS: frozenset = frozenset({RELATION_HOLDING})

# =============================================================================
# Search
# =============================================================================

DEFAULT_DISPLACEMENT_COST: int = 4
"""
Heuristic cost charged per object that has to be moved out of the way.

Clearing one object takes at least a pick, a move and a drop, plus the move
back to the original stack. The same constant scales unary (holding) and
binary estimates so the two stay comparable.

Must be >= 1.
"""

DEFAULT_EXPANSION_BUDGET: int = 50000
"""
Maximum number of node expansions per interpretation.

The ceiling is a node count rather than wall-clock time so that a timeout
is reproducible for the same world and goal.
"""

DEFAULT_HEURISTIC_CACHE_SIZE: int = 8192
"""Maximum number of memoized heuristic estimates per compiled goal."""

# =============================================================================
# Driver Messages
# =============================================================================

ALREADY_TRUE_MESSAGE: str = "The interpretation is already true!"
"""Placeholder plan returned when the goal already holds in the start state."""

NO_PATH_MESSAGE: str = "No path exists from start to goal"

ERROR_SEPARATOR: str = " ; "
"""Separator used to merge per-interpretation errors into one message."""
