"""
infrastructure/interfaces.py

Base interface for planning engines.

Engines expose a uniform entry point so that a caller (for example the
dialogue shell in front of the interpreter) can hand over a query plus a
context dict and receive a standardized result, without knowing which
engine produced it.

Usage:
    from infrastructure.interfaces import BaseReasoningEngine, ReasoningResult

    class MyPlanner(BaseReasoningEngine):
        def reason(self, query: str, context: Dict[str, Any]) -> ReasoningResult:
            ...

        def get_capabilities(self) -> List[str]:
            return ["planning"]

        def estimate_cost(self, query: str) -> float:
            return 0.5
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ReasoningResult:
    """
    Standardized result container.

    Attributes:
        success: Whether the engine produced a result
        answer: Human-readable answer (or error summary on failure)
        confidence: Confidence score in [0.0, 1.0]
        metadata: Engine-specific details (plans, visited counts, errors)
        strategy_used: Name of the strategy employed
        computation_cost: Share of the search budget used
    """

    success: bool
    answer: str = ""
    confidence: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)
    strategy_used: str = ""
    computation_cost: float = 0.0

    def __post_init__(self):
        """Validate confidence is in valid range."""
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(
                f"Confidence must be in [0.0, 1.0], got {self.confidence}"
            )


class BaseReasoningEngine(ABC):
    """
    Abstract base class for engines driven through a query/context pair.

    Implementations return failures as ReasoningResult(success=False) rather
    than raising, so a caller can try several engines in turn.
    """

    @abstractmethod
    def reason(self, query: str, context: Dict[str, Any]) -> ReasoningResult:
        """
        Execute the engine on the given query with provided context.

        Args:
            query: Query string (e.g. the user's utterance)
            context: Engine-specific inputs

        Returns:
            ReasoningResult
        """
        pass

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        """Capability identifiers (lowercase, underscore-separated)."""
        pass

    @abstractmethod
    def estimate_cost(self, query: str) -> float:
        """
        Relative cost estimate for handling the query.

        0.0 - 0.3 cheap, 0.3 - 0.7 medium, 0.7 - 1.0 expensive.
        """
        pass

    def supports_capability(self, capability: str) -> bool:
        """Check if this engine supports a specific capability."""
        return capability in self.get_capabilities()
