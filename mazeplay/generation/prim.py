"""Randomized Prim maze generator."""

from __future__ import annotations

from typing import List, Tuple

from ..base import AbstractMazeGenerator, GenerationAlgorithm
from ..grid import Grid, Position


class PrimGenerator(AbstractMazeGenerator):
    """Grow the maze from a random seed by picking random frontier walls."""

    algorithm = GenerationAlgorithm.PRIM

    def carve(self, grid: Grid) -> List[Position]:
        start = self._random_cell(grid)
        grid.mark_visited(start)
        order: List[Position] = [start]
        frontier: List[Tuple[Position, Position]] = [(start, n) for n in grid.neighbors(start)]

        while frontier:
            index = self._rng.randrange(len(frontier))
            frontier[index], frontier[-1] = frontier[-1], frontier[index]
            source, target = frontier.pop()
            if grid.is_visited(target):
                continue
            grid.remove_wall_between(source, target)
            grid.mark_visited(target)
            order.append(target)
            frontier.extend((target, n) for n in grid.neighbors(target, unvisited_only=True))
        return order


__all__ = ["PrimGenerator"]
