"""Maze solving algorithms."""

from typing import Dict, Type

from ..base import AbstractMazeSolver, AlgorithmId, SolvingAlgorithm, resolve_algorithm
from .bfs import BreadthFirstSolver
from .dfs import DepthFirstSolver

__all__ = ["SOLVERS", "BreadthFirstSolver", "DepthFirstSolver", "get_solver"]

SOLVERS: Dict[SolvingAlgorithm, Type[AbstractMazeSolver]] = {
    SolvingAlgorithm.DFS: DepthFirstSolver,
    SolvingAlgorithm.BFS: BreadthFirstSolver,
}


def get_solver(algorithm: AlgorithmId) -> AbstractMazeSolver:
    """Instantiate the solver registered for ``algorithm``."""

    return SOLVERS[resolve_algorithm(SolvingAlgorithm, algorithm)]()
