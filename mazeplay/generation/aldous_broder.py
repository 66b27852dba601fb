"""Aldous-Broder random walk maze generator."""

from __future__ import annotations

from typing import List

from ..base import AbstractMazeGenerator, GenerationAlgorithm
from ..grid import Grid, Position


class AldousBroderGenerator(AbstractMazeGenerator):
    """Random walk that links each cell on its first visit.

    Produces uniformly random spanning trees; the walk needs O(n log n)
    expected moves on an n-cell grid.
    """

    algorithm = GenerationAlgorithm.ALDOUS_BRODER

    def carve(self, grid: Grid) -> List[Position]:
        current = self._random_cell(grid)
        grid.mark_visited(current)
        order: List[Position] = [current]
        remaining = grid.cell_count - 1

        while remaining:
            following = self._rng.choice(grid.neighbors(current))
            if not grid.is_visited(following):
                grid.remove_wall_between(current, following)
                grid.mark_visited(following)
                order.append(following)
                remaining -= 1
            current = following
        return order


__all__ = ["AldousBroderGenerator"]
