from __future__ import annotations
from typing import Callable, Optional

from ..core.frontiers import SortedMerge
from ..core.metrics import SearchResult, measure
from ..core.node import Option
from ..core.problem import Problem
from ..core.search import Evaluation, GeneralSearch, Heuristic, HeuristicAlgorithm


class BestFirstSearch(GeneralSearch):
    """Expands the option with the smallest evaluation f first.

    The open list is kept sorted; equally evaluated options keep the order in
    which they were generated.
    """
    name = "BestFirst"

    def __init__(self, evaluation: Optional[Evaluation] = None):
        super().__init__()
        self._evaluation = evaluation

    @property
    def evaluation(self) -> Evaluation:
        if self._evaluation is None:
            raise TypeError(f"{type(self).__name__} needs an evaluation function")
        return self._evaluation

    def create_traversal(self, problem: Problem) -> SortedMerge:
        return SortedMerge(problem, self.evaluation)

    def is_optimal(self) -> bool:
        return False

    def complexity(self) -> str:
        return "O(b^d)"

    def space_complexity(self) -> str:
        return "O(b^d)"


class UniformCostSearch(BestFirstSearch):
    """f = g (Dijkstra over the search tree)."""
    name = "UCS"

    def __init__(self):
        super().__init__(lambda n: n.cost)

    def is_optimal(self) -> bool:
        return True


class GreedyBestFirstSearch(HeuristicAlgorithm, BestFirstSearch):
    """f = h: follows the heuristic only; neither optimal nor complete on infinite spaces."""
    name = "Greedy"

    def __init__(self, heuristic: Optional[Heuristic] = None):
        BestFirstSearch.__init__(self)
        HeuristicAlgorithm.__init__(self, heuristic)

    @property
    def evaluation(self) -> Evaluation:
        h = self.heuristic
        return lambda n: h(n.state)

    def complexity(self) -> str:
        return "O(b^m)"

    def space_complexity(self) -> str:
        return "O(b^m)"


def best_first_search(problem: Problem, f: Callable[[Option], float], name: str = "BestFirst") -> SearchResult:
    return measure(name, BestFirstSearch(f), problem)


def uniform_cost_search(problem: Problem) -> SearchResult:
    return measure("UCS", UniformCostSearch(), problem)


def greedy_best_first_search(problem: Problem, h: Optional[Heuristic] = None) -> SearchResult:
    return measure("Greedy", GreedyBestFirstSearch(h), problem)
