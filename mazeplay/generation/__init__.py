"""Maze generation algorithms."""

from typing import Dict, Type

from ..base import AbstractMazeGenerator, AlgorithmId, GenerationAlgorithm, resolve_algorithm
from .aldous_broder import AldousBroderGenerator
from .binary_tree import BinaryTreeGenerator
from .dfs import DepthFirstGenerator
from .eller import EllerGenerator
from .kruskal import DisjointSet, KruskalGenerator
from .prim import PrimGenerator
from .recursive_division import RecursiveDivisionGenerator
from .sidewinder import SidewinderGenerator

__all__ = [
    "GENERATORS",
    "AldousBroderGenerator",
    "BinaryTreeGenerator",
    "DepthFirstGenerator",
    "DisjointSet",
    "EllerGenerator",
    "KruskalGenerator",
    "PrimGenerator",
    "RecursiveDivisionGenerator",
    "SidewinderGenerator",
    "get_generator",
]

GENERATORS: Dict[GenerationAlgorithm, Type[AbstractMazeGenerator]] = {
    GenerationAlgorithm.DFS: DepthFirstGenerator,
    GenerationAlgorithm.BINARY_TREE: BinaryTreeGenerator,
    GenerationAlgorithm.SIDEWINDER: SidewinderGenerator,
    GenerationAlgorithm.ELLER: EllerGenerator,
    GenerationAlgorithm.PRIM: PrimGenerator,
    GenerationAlgorithm.KRUSKAL: KruskalGenerator,
    GenerationAlgorithm.RECURSIVE_DIVISION: RecursiveDivisionGenerator,
    GenerationAlgorithm.ALDOUS_BRODER: AldousBroderGenerator,
}


def get_generator(algorithm: AlgorithmId, **kwargs) -> AbstractMazeGenerator:
    """Instantiate the generator registered for ``algorithm``."""

    return GENERATORS[resolve_algorithm(GenerationAlgorithm, algorithm)](**kwargs)
