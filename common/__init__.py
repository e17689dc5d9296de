"""
Common constants for the stack-world planner.

This package provides centralized default values and fixed vocabulary
(action labels, relation names, object forms) shared by all components.
"""

from common.constants import *

__all__ = [
    # Actions
    "ACTION_LEFT",
    "ACTION_RIGHT",
    "ACTION_PICK",
    "ACTION_DROP",
    "ACTION_LABELS",
    "ACTION_COST",
    # Object Vocabulary
    "FLOOR_ID",
    "FLOOR_HEIGHT",
    # Relations
    "RELATION_HOLDING",
    "SAME_STACK_RELATIONS",
    "CROSS_STACK_RELATIONS",
    "BINARY_RELATIONS",
    "UNARY_RELATIONS",
    # Search
    "DEFAULT_DISPLACEMENT_COST",
    "DEFAULT_EXPANSION_BUDGET",
    "DEFAULT_HEURISTIC_CACHE_SIZE",
    # Driver Messages
    "ALREADY_TRUE_MESSAGE",
    "NO_PATH_MESSAGE",
    "ERROR_SEPARATOR",
]
