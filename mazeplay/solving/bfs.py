"""Breadth-first maze solver."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional

from ..base import AbstractMazeSolver, Maze, SolvingAlgorithm
from ..grid import Position
from ..steps import SolvingStep

logger = logging.getLogger(__name__)


class BreadthFirstSolver(AbstractMazeSolver):
    """Queue-based search.

    Cells are discovered in non-decreasing distance from start, so the path
    recorded when ``end`` is first discovered has the minimum number of edges.
    """

    algorithm = SolvingAlgorithm.BFS

    def solve(self, maze: Maze) -> List[SolvingStep]:
        if not self._endpoints_valid(maze):
            return [SolvingStep(visited_cells=(), path=())]

        grid, start, end = maze.cells, maze.start, maze.end
        queue: Deque[Position] = deque([start])
        parents: Dict[Position, Optional[Position]] = {start: None}
        visited: List[Position] = [start]
        steps: List[SolvingStep] = [SolvingStep(tuple(visited), (start,), start)]
        if start == end:
            steps.append(SolvingStep(tuple(visited), (start,), end))
            return steps

        while queue:
            current = queue.popleft()
            for neighbor in grid.neighbors(current):
                if neighbor in parents or grid.has_wall_between(current, neighbor):
                    continue
                parents[neighbor] = current
                visited.append(neighbor)
                path = self._rebuild_path(parents, neighbor)
                steps.append(SolvingStep(tuple(visited), path, neighbor))
                if neighbor == end:
                    return steps
                queue.append(neighbor)

        logger.debug("BFS exhausted %d cells without reaching %s", len(visited), end)
        steps.append(SolvingStep(tuple(visited), ()))
        return steps


__all__ = ["BreadthFirstSolver"]
