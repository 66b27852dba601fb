"""Depth-first maze solver."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..base import AbstractMazeSolver, Maze, SolvingAlgorithm
from ..grid import Position
from ..steps import SolvingStep

logger = logging.getLogger(__name__)


class DepthFirstSolver(AbstractMazeSolver):
    """Stack-based search; each step's path is the current DFS branch, not the shortest route."""

    algorithm = SolvingAlgorithm.DFS

    def solve(self, maze: Maze) -> List[SolvingStep]:
        if not self._endpoints_valid(maze):
            return [SolvingStep(visited_cells=(), path=())]

        grid, start, end = maze.cells, maze.start, maze.end
        stack: List[Position] = [start]
        parents: Dict[Position, Optional[Position]] = {start: None}
        visited: List[Position] = [start]
        steps: List[SolvingStep] = [SolvingStep(tuple(visited), (start,), start)]

        while stack:
            current = stack.pop()
            if current == end:
                steps.append(SolvingStep(tuple(visited), self._rebuild_path(parents, end), end))
                return steps
            # Reversed so that neighbours pop in N, E, S, W order.
            for neighbor in reversed(grid.neighbors(current)):
                if neighbor in parents or grid.has_wall_between(current, neighbor):
                    continue
                parents[neighbor] = current
                stack.append(neighbor)
                visited.append(neighbor)
                steps.append(SolvingStep(tuple(visited), self._rebuild_path(parents, neighbor), neighbor))

        logger.debug("DFS exhausted %d cells without reaching %s", len(visited), end)
        steps.append(SolvingStep(tuple(visited), ()))
        return steps


__all__ = ["DepthFirstSolver"]
