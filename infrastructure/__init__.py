"""
infrastructure package

Shared infrastructure for the stack-world planner.

Modules:
    - interfaces: Base interface and result type for planning engines
"""

from infrastructure.interfaces import BaseReasoningEngine, ReasoningResult

__all__ = [
    "BaseReasoningEngine",
    "ReasoningResult",
]
