"""Abstract interfaces for maze generation and solving algorithms."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from .grid import Grid, Position
from .steps import GenerationStep, SolvingStep, record_generation_steps

logger = logging.getLogger(__name__)

AlgorithmId = Union["GenerationAlgorithm", "SolvingAlgorithm", int, str]
EnumT = TypeVar("EnumT", bound=IntEnum)


class GenerationAlgorithm(IntEnum):
    DFS = 0
    BINARY_TREE = 1
    SIDEWINDER = 2
    ELLER = 3
    PRIM = 4
    KRUSKAL = 5
    RECURSIVE_DIVISION = 6
    ALDOUS_BRODER = 7


class SolvingAlgorithm(IntEnum):
    DFS = 0
    BFS = 1


def resolve_algorithm(enum_cls: Type[EnumT], value: AlgorithmId) -> EnumT:
    """Map an enum member, numeric id or case-insensitive name onto ``enum_cls``."""

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return enum_cls[key]
        except KeyError as exc:
            raise ValueError(f"Unknown {enum_cls.__name__} name: {value!r}") from exc
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unknown {enum_cls.__name__} id: {value!r}") from exc


def check_probability(name: str, value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1")
    return value


@dataclass
class Maze:
    """Solver input: a finished grid plus its endpoints."""

    cells: Grid
    width: int
    height: int
    start: Position
    end: Position

    @classmethod
    def from_grid(
        cls,
        grid: Grid,
        start: Optional[Tuple[int, int]] = None,
        end: Optional[Tuple[int, int]] = None,
    ) -> "Maze":
        return cls(
            cells=grid,
            width=grid.width,
            height=grid.height,
            start=Position(*start) if start is not None else Position(0, 0),
            end=Position(*end) if end is not None else Position(grid.height - 1, grid.width - 1),
        )


class AbstractMazeGenerator(ABC):
    """Base class for algorithms that carve a perfect maze into a grid.

    Subclasses implement :meth:`carve`, which mutates the grid silently and
    reports the order in which cells were first touched. :meth:`generate`
    turns that into the uniform colouring trace.
    """

    algorithm: ClassVar[GenerationAlgorithm]

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def create_grid(self, width: int, height: int) -> Grid:
        return Grid.create(width, height)

    @abstractmethod
    def carve(self, grid: Grid) -> Sequence[Position]:
        """Turn ``grid`` into a perfect maze and return the cell visit order."""

    def build(self, width: int, height: int) -> Grid:
        """Run only the topology phase and return the carved grid."""

        grid = self.create_grid(width, height)
        self.carve(grid)
        grid.reset_annotations()
        return grid

    def generate(self, width: int, height: int) -> List[GenerationStep]:
        grid = self.create_grid(width, height)
        visit_order = self.carve(grid)
        steps = record_generation_steps(grid, visit_order)
        logger.debug(
            "%s carved %dx%d grid: %d open edges, %d ordered cells, %d steps",
            type(self).__name__,
            width,
            height,
            grid.open_edge_count(),
            len(visit_order),
            len(steps),
        )
        return steps

    def _random_cell(self, grid: Grid) -> Position:
        return Position(self._rng.randrange(grid.height), self._rng.randrange(grid.width))


class AbstractMazeSolver(ABC):
    """Base class for traversal algorithms that emit solving step logs."""

    algorithm: ClassVar[SolvingAlgorithm]

    @abstractmethod
    def solve(self, maze: Maze) -> List[SolvingStep]:
        """Explore ``maze`` from start to end and return the step log."""

    @staticmethod
    def _rebuild_path(parents: Dict[Position, Optional[Position]], node: Position) -> Tuple[Position, ...]:
        path: List[Position] = []
        current: Optional[Position] = node
        while current is not None:
            path.append(current)
            current = parents.get(current)
        path.reverse()
        return tuple(path)

    @staticmethod
    def _endpoints_valid(maze: Maze) -> bool:
        return maze.cells.in_bounds(maze.start) and maze.cells.in_bounds(maze.end)


__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "AlgorithmId",
    "GenerationAlgorithm",
    "Maze",
    "SolvingAlgorithm",
    "check_probability",
    "resolve_algorithm",
]
