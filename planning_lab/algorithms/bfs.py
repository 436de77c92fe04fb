from __future__ import annotations
from ..core.frontiers import FIFOQueue
from ..core.metrics import SearchResult, measure
from ..core.problem import Problem
from ..core.search import GeneralSearch


class BreadthFirstSearch(GeneralSearch):
    """Expands the shallowest options first (FIFO of successor cursors).

    Finds a solution of minimal depth; optimal when all steps cost the same.
    """
    name = "BFS"

    def create_traversal(self, problem: Problem) -> FIFOQueue:
        return FIFOQueue(problem)

    def is_optimal(self) -> bool:
        return False

    def complexity(self) -> str:
        return "O(b^d)"

    def space_complexity(self) -> str:
        return "O(b^d)"


def breadth_first_search(problem: Problem) -> SearchResult:
    return measure("BFS", BreadthFirstSearch(), problem)
