"""Structural checks for generated mazes and drawn paths."""

from __future__ import annotations

import argparse
import json
from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from .grid import Grid, Position, is_adjacent


@dataclass
class MazeReport:
    width: int
    height: int
    open_edges: int
    expected_edges: int
    reachable_cells: int
    boundary_intact: bool
    symmetric: bool
    is_perfect: bool
    message: str

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "open_edges": self.open_edges,
            "expected_edges": self.expected_edges,
            "reachable_cells": self.reachable_cells,
            "boundary_intact": self.boundary_intact,
            "symmetric": self.symmetric,
            "is_perfect": self.is_perfect,
            "message": self.message,
        }


def reachable_cells(grid: Grid, origin: Tuple[int, int] = (0, 0)) -> Set[Position]:
    """Flood fill through open walls starting at ``origin``."""

    origin = Position(*origin)
    if not grid.in_bounds(origin):
        return set()
    queue = deque([origin])
    seen = {origin}
    while queue:
        current = queue.popleft()
        for neighbor in grid.neighbors(current):
            if neighbor not in seen and not grid.has_wall_between(current, neighbor):
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def evaluate_maze(grid: Grid) -> MazeReport:
    """Check that ``grid`` is a perfect maze: a spanning tree with intact outer walls."""

    open_edges = grid.open_edge_count()
    expected = grid.cell_count - 1
    reachable = len(reachable_cells(grid))
    boundary = grid.boundary_intact()
    symmetric = grid.is_symmetric()
    # A connected graph with n - 1 edges is a tree.
    perfect = boundary and symmetric and reachable == grid.cell_count and open_edges == expected

    if not symmetric:
        message = "Wall flags disagree between neighbouring cells."
    elif not boundary:
        message = "Outer boundary has an opening."
    elif reachable < grid.cell_count:
        message = f"Only {reachable} of {grid.cell_count} cells are reachable."
    elif open_edges > expected:
        message = "Maze contains cycles."
    else:
        message = "Maze is a perfect spanning tree."

    return MazeReport(
        width=grid.width,
        height=grid.height,
        open_edges=open_edges,
        expected_edges=expected,
        reachable_cells=reachable,
        boundary_intact=boundary,
        symmetric=symmetric,
        is_perfect=perfect,
        message=message,
    )


def path_is_connected(grid: Grid, path: Sequence[Tuple[int, int]]) -> bool:
    """True if every consecutive pair is adjacent with no wall between them."""

    for a, b in zip(path, path[1:]):
        if not is_adjacent(a, b) or grid.has_wall_between(a, b):
            return False
    return True


def is_valid_user_path(
    grid: Grid,
    path: Sequence[Tuple[int, int]],
    start: Tuple[int, int],
) -> bool:
    if not path:
        return True
    if tuple(path[0]) != tuple(start):
        return False
    if len(set(map(tuple, path))) != len(path):
        return False
    return all(grid.in_bounds(p) for p in path) and path_is_connected(grid, path)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a maze and report whether it is perfect")
    parser.add_argument("--algorithm", type=str, default="dfs")
    parser.add_argument("--width", type=int, default=15)
    parser.add_argument("--height", type=int, default=15)
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    from .generation import get_generator

    args = _parse_args(argv)
    grid = get_generator(args.algorithm, seed=args.seed).build(args.width, args.height)
    print(json.dumps(evaluate_maze(grid).to_dict(), indent=2))


__all__ = [
    "MazeReport",
    "evaluate_maze",
    "is_valid_user_path",
    "path_is_connected",
    "reachable_cells",
]


if __name__ == "__main__":
    main()
