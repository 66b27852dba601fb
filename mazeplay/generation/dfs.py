"""Recursive backtracker maze generator."""

from __future__ import annotations

from typing import List

from ..base import AbstractMazeGenerator, GenerationAlgorithm
from ..grid import Grid, Position


class DepthFirstGenerator(AbstractMazeGenerator):
    """Depth-first carving with an explicit stack, starting from a random cell."""

    algorithm = GenerationAlgorithm.DFS

    def carve(self, grid: Grid) -> List[Position]:
        start = self._random_cell(grid)
        grid.mark_visited(start)
        stack: List[Position] = [start]
        order: List[Position] = [start]

        while stack:
            current = stack[-1]
            candidates = grid.neighbors(current, unvisited_only=True)
            if not candidates:
                stack.pop()
                continue
            chosen = self._rng.choice(candidates)
            grid.remove_wall_between(current, chosen)
            grid.mark_visited(chosen)
            stack.append(chosen)
            order.append(chosen)
        return order


__all__ = ["DepthFirstGenerator"]
