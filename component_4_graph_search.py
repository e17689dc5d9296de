"""
Component 4: Graph Search

Generic best-first (A*) search over an implicit graph:
- Graph: Successor enumeration and node ordering
- Successor: Edge label, child node and edge cost
- SearchResult: Tagged outcome (success / failure / timeout)
- astar_search: A* with a hard node-expansion budget

The search knows nothing about stacks or goals. Nodes must be hashable;
two nodes that compare equal are treated as the same state and expanded at
most once.

Author: Stack Planner Team
Date: 2026-10-19
"""

import functools
import heapq
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Tuple, TypeVar

from component_8_logging_config import get_logger

logger = get_logger(__name__)

N = TypeVar("N")


# ============================================================================
# Graph Interface
# ============================================================================


@dataclass(frozen=True)
class Successor(Generic[N]):
    """
    Outgoing edge of a node.

    Attributes:
        action: Label of the edge (e.g. "l", "r", "p", "d")
        child: Node reached through the edge
        cost: Edge cost
    """

    action: str
    child: N
    cost: float = 1.0


class Graph(ABC, Generic[N]):
    """Implicit graph explored by astar_search."""

    @abstractmethod
    def successors(self, node: N) -> List[Successor[N]]:
        """Outgoing edges of a node."""
        raise NotImplementedError

    @abstractmethod
    def compare_nodes(self, a: N, b: N) -> int:
        """Total order on nodes: negative, zero or positive like cmp()."""
        raise NotImplementedError


# ============================================================================
# Search Result
# ============================================================================


class SearchStatus(Enum):
    """Outcome of a search."""

    SUCCESS = "success"
    FAILURE = "failure"  # Frontier exhausted
    TIMEOUT = "timeout"  # Expansion budget exhausted


@dataclass
class SearchResult(Generic[N]):
    """
    Result of astar_search.

    Attributes:
        status: SUCCESS, FAILURE or TIMEOUT
        path: Edges from start to the goal node (empty unless SUCCESS)
        cost: Total path cost (only meaningful on SUCCESS)
        visited: Number of expanded nodes
    """

    status: SearchStatus
    path: List[Successor[N]] = field(default_factory=list)
    cost: float = 0.0
    visited: int = 0

    @property
    def success(self) -> bool:
        return self.status == SearchStatus.SUCCESS

    @property
    def actions(self) -> List[str]:
        """Edge labels along the path."""
        return [edge.action for edge in self.path]


@dataclass(order=True)
class _FrontierEntry:
    """Priority queue entry ordered by f-score, then by graph node order."""

    f_score: float
    node_key: Any
    node: Any = field(compare=False)
    g_score: float = field(compare=False)


# ============================================================================
# A* Search
# ============================================================================


def astar_search(
    graph: Graph[N],
    start: N,
    goal: Callable[[N], bool],
    heuristic: Callable[[N], float],
    max_expansions: int,
) -> SearchResult[N]:
    """
    Find a cheapest path from start to a node satisfying goal.

    Args:
        graph: Graph providing successors and node ordering
        start: Start node
        goal: Goal test
        heuristic: Estimated remaining cost (should never overestimate)
        max_expansions: Maximum number of nodes to expand before giving up

    Returns:
        SearchResult; on TIMEOUT, visited equals the number of expansions made
    """
    node_key = functools.cmp_to_key(graph.compare_nodes)

    open_list = [_FrontierEntry(heuristic(start), node_key(start), start, 0.0)]
    best_g: Dict[N, float] = {start: 0.0}
    came_from: Dict[N, Tuple[N, Successor[N]]] = {}
    closed_set = set()
    expansions = 0

    while open_list:
        current_entry = heapq.heappop(open_list)
        current = current_entry.node

        # Stale entry superseded by a cheaper path, or already expanded
        if current in closed_set or current_entry.g_score > best_g[current]:
            continue

        if goal(current):
            path = _reconstruct_path(came_from, current)
            logger.debug(
                f"Goal reached: path length {len(path)}, {expansions} expansions"
            )
            return SearchResult(
                status=SearchStatus.SUCCESS,
                path=path,
                cost=current_entry.g_score,
                visited=expansions,
            )

        if expansions >= max_expansions:
            logger.debug(f"Expansion budget of {max_expansions} exhausted")
            return SearchResult(status=SearchStatus.TIMEOUT, visited=expansions)

        closed_set.add(current)
        expansions += 1

        for edge in graph.successors(current):
            child = edge.child
            if child in closed_set:
                continue

            tentative_g = current_entry.g_score + edge.cost
            if child not in best_g or tentative_g < best_g[child]:
                best_g[child] = tentative_g
                came_from[child] = (current, edge)
                heapq.heappush(
                    open_list,
                    _FrontierEntry(
                        f_score=tentative_g + heuristic(child),
                        node_key=node_key(child),
                        node=child,
                        g_score=tentative_g,
                    ),
                )

    logger.debug(f"Frontier exhausted after {expansions} expansions")
    return SearchResult(status=SearchStatus.FAILURE, visited=expansions)


def _reconstruct_path(
    came_from: Dict[N, Tuple[N, Successor[N]]], node: N
) -> List[Successor[N]]:
    """Edges from the start node to node."""
    path = []
    while node in came_from:
        parent, edge = came_from[node]
        path.append(edge)
        node = parent
    return list(reversed(path))
