# planning_lab/algorithms/registry.py
# Name -> factory table so that runners can build any algorithm from an AlgorithmConfig.
from __future__ import annotations
from typing import Callable, Dict, List, Optional

from .annealing import SimulatedAnnealing
from .astar import AStar
from .best_first import GreedyBestFirstSearch, UniformCostSearch
from .bfs import BreadthFirstSearch
from .branch_and_bound import BranchAndBound
from .broadening import IterativeBroadening
from .dfs import DepthFirstSearch
from .hill_climbing import HillClimbing
from .ida_star import IterativeDeepeningAStar
from .ids import IterativeDeepening
from .parallel_bnb import ParallelBranchAndBound
from .rbfs import IterativeExpansion
from .threshold import ThresholdAccepting
from .weighted_astar import WAStar
from ..core.config import AlgorithmConfig, geometric_schedule, linear_schedule
from ..mdp.gauss_seidel import GaussSeidelDynamicProgramming
from ..mdp.rtdp import RealTimeDynamicProgramming

Factory = Callable[[AlgorithmConfig], object]


def _local_kwargs(c: AlgorithmConfig) -> dict:
    kwargs = dict(heuristic=c.heuristic, sample_size=c.sample_size, seed=c.seed)
    if c.max_iterations is not None:
        kwargs["max_iterations"] = c.max_iterations
    return kwargs


def _branch_and_bound(c: AlgorithmConfig) -> BranchAndBound:
    continued = True if c.continued_when_found is None else c.continued_when_found
    return BranchAndBound(c.heuristic, c.max_bound, continued)


ALGORITHMS: Dict[str, Factory] = {
    # uninformed
    "bfs": lambda c: BreadthFirstSearch(),
    "dfs": lambda c: DepthFirstSearch(),
    "ucs": lambda c: UniformCostSearch(),
    "ids": lambda c: IterativeDeepening(c.depth_step, c.max_bound),
    "broadening": lambda c: IterativeBroadening(),
    # informed
    "greedy": lambda c: GreedyBestFirstSearch(c.heuristic),
    "astar": lambda c: AStar(c.heuristic),
    "wastar": lambda c: WAStar(c.heuristic, c.weight),
    "ida-star": lambda c: IterativeDeepeningAStar(c.heuristic, c.max_iterations),
    "rbfs": lambda c: IterativeExpansion(c.heuristic),
    "branch-and-bound": _branch_and_bound,
    "parallel-branch-and-bound": lambda c: ParallelBranchAndBound(c.heuristic, c.max_bound, c.max_workers),
    # local optimizers
    "hill-climbing": lambda c: HillClimbing(randomized=c.randomized, **_local_kwargs(c)),
    "simulated-annealing": lambda c: SimulatedAnnealing(
        schedule=c.schedule or geometric_schedule(1.0, 0.95, 1e-3), **_local_kwargs(c)),
    "threshold-accepting": lambda c: ThresholdAccepting(
        schedule=c.schedule or linear_schedule(2.0, 100), **_local_kwargs(c)),
    # MDP solvers
    "gauss-seidel": lambda c: GaussSeidelDynamicProgramming(c.heuristic, c.states, c.tolerance, c.discount),
    "rtdp": lambda c: RealTimeDynamicProgramming(c.heuristic, c.discount),
}


def available_algorithms() -> List[str]:
    return sorted(ALGORITHMS)


def create_algorithm(name: str, config: Optional[AlgorithmConfig] = None):
    """Build the algorithm registered under name; unknown names raise KeyError listing the known ones."""
    try:
        factory = ALGORITHMS[name]
    except KeyError:
        raise KeyError(f"unknown algorithm {name!r}; known: {', '.join(available_algorithms())}") from None
    return factory(config if config is not None else AlgorithmConfig())
