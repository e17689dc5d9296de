"""
planner_exceptions.py

Central exception hierarchy for the stack-world planner.
Defines specialized exception classes for the different failure scenarios.

Exception hierarchy:
    PlannerException (base)
    ├── WorldModelException
    │   ├── InvalidWorldStateError
    │   └── IllegalActionError
    ├── GoalException
    │   ├── InvalidGoalFormulaError
    │   │   └── UnknownRelationError
    │   └── UnknownObjectError
    ├── PlanningException
    │   ├── UnreachableGoalError
    │   ├── SearchBudgetExceededError
    │   └── AggregatePlanningError
    └── ConfigurationException
        └── InvalidConfigError

Usage:
    from planner_exceptions import AggregatePlanningError

    try:
        results = planner.plan(interpretations)
    except AggregatePlanningError as e:
        logger.error(f"No interpretation could be planned: {e}")
        for cause in e.errors:
            logger.error(f"  - {cause}")
"""

from typing import Any, Dict, List, Optional


class PlannerException(Exception):
    """
    Base exception for all planner-specific errors.

    All planner exceptions support:
    - Detailed error messages
    - Contextual information (dict)
    - Original exception chaining (via 'from' or original_exception)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ============================================================================
# WORLD MODEL EXCEPTIONS
# ============================================================================


class WorldModelException(PlannerException):
    """Base exception for errors in the world description or its mutation."""


class InvalidWorldStateError(WorldModelException):
    """
    The world description violates a structural invariant.

    Causes:
    - Arm index outside the stack range
    - Object identifier placed twice (or both held and stacked)
    - Stacked object without a physical descriptor
    - Unknown form or size in a descriptor
    """


class IllegalActionError(WorldModelException):
    """
    A primitive action cannot be applied to a state.

    Causes:
    - Moving past the leftmost or rightmost stack
    - Picking up while holding, or from an empty stack
    - Dropping while empty-handed, or onto an object that cannot support it
    - Unknown action label
    """

    def __init__(self, message: str, action: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["action"] = action
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# GOAL EXCEPTIONS
# ============================================================================


class GoalException(PlannerException):
    """Base exception for errors in goal formulas."""


class InvalidGoalFormulaError(GoalException):
    """
    A goal formula is malformed.

    Causes:
    - Syntax error in the textual notation
    - Literal with the wrong number of arguments
    - Empty disjunction or conjunction
    - 'floor' used where an object is required
    """


class UnknownRelationError(InvalidGoalFormulaError):
    """A literal names a relation the planner does not understand."""

    def __init__(self, message: str, relation: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["relation"] = relation
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class UnknownObjectError(GoalException):
    """A literal names an object that does not exist in the world."""

    def __init__(self, message: str, object_id: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["object_id"] = object_id
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# PLANNING EXCEPTIONS
# ============================================================================


class PlanningException(PlannerException):
    """Base exception for search and planning failures."""


class UnreachableGoalError(PlanningException):
    """
    The search frontier was exhausted without reaching a goal state.

    Recoverable by trying the next interpretation.
    """


class SearchBudgetExceededError(PlanningException):
    """
    The node-expansion budget ran out before a goal state was found.

    Recoverable by trying the next interpretation. The number of visited
    nodes is kept in the context for diagnosis.
    """

    def __init__(self, message: str, visited: Optional[int] = None, **kwargs):
        context = kwargs.get("context", {})
        context["visited"] = visited
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.visited = visited


class AggregatePlanningError(PlanningException):
    """
    No interpretation yielded a plan.

    The message is every per-interpretation error joined together, so the
    caller can report all considered readings. The individual messages are
    also available as ``errors``.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = list(errors or [])


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================


class ConfigurationException(PlannerException):
    """Base exception for configuration errors."""


class InvalidConfigError(ConfigurationException):
    """
    Invalid configuration.

    Causes:
    - Non-positive expansion budget or cache size
    - Displacement cost below 1
    - Config file that is not a YAML mapping
    """


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def wrap_exception(
    exc: Exception,
    planner_exception_class: type[PlannerException],
    message: str,
    **context,
) -> PlannerException:
    """
    Convert a generic exception into a planner-specific exception.

    Args:
        exc: Original exception
        planner_exception_class: Target exception class (e.g. InvalidWorldStateError)
        message: Custom error message
        **context: Additional context information

    Returns:
        Planner exception chained to the original exception

    Example:
        try:
            arm = int(data["arm"])
        except (KeyError, ValueError) as e:
            raise wrap_exception(e, InvalidWorldStateError, "Bad arm index", data=data)
    """
    return planner_exception_class(
        message=message, context=context, original_exception=exc
    )


def get_user_friendly_message(exc: Exception, include_details: bool = False) -> str:
    """
    Build a user-facing error message from an exception.

    Args:
        exc: Exception object
        include_details: Whether to append technical details (debug mode)

    Returns:
        Human-readable error message
    """
    friendly_messages = {
        InvalidWorldStateError: "[ERROR] The world description is inconsistent.",
        IllegalActionError: "[ERROR] The arm cannot perform that action here.",
        InvalidGoalFormulaError: "[ERROR] The goal could not be understood.",
        UnknownRelationError: "[ERROR] The goal uses an unknown spatial relation.",
        UnknownObjectError: "[ERROR] The goal refers to an object that does not exist.",
        UnreachableGoalError: "[ERROR] The goal cannot be reached from the current world.",
        SearchBudgetExceededError: "[ERROR] Planning gave up before finding a solution.",
        AggregatePlanningError: "[ERROR] None of the interpretations could be planned.",
        InvalidConfigError: "[ERROR] Invalid configuration. Please check the settings.",
    }

    default_message = "[ERROR] An unexpected error occurred."

    user_message = friendly_messages.get(type(exc), default_message)

    if isinstance(exc, UnknownObjectError) and exc.context.get("object_id"):
        user_message = (
            f"[ERROR] The goal refers to '{exc.context['object_id']}', "
            f"which does not exist."
        )
    elif isinstance(exc, SearchBudgetExceededError) and exc.visited is not None:
        user_message = (
            f"[ERROR] Planning gave up after visiting {exc.visited} states."
        )

    if include_details and isinstance(exc, PlannerException):
        user_message += f"\n\nTechnical details: {exc.message}"
        if exc.context:
            user_message += f"\n   Context: {exc.context}"

    return user_message
