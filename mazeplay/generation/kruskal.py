"""Randomized Kruskal maze generator."""

from __future__ import annotations

from typing import List, Set, Tuple

from ..base import AbstractMazeGenerator, GenerationAlgorithm
from ..grid import Grid, Position


class DisjointSet:
    """Union-find over ``0..size-1`` with path compression and union by rank."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))
        self._rank = [0] * size
        self.components = size

    def find(self, item: int) -> int:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets holding ``a`` and ``b``; False if they were already joined."""

        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1
        self.components -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


class KruskalGenerator(AbstractMazeGenerator):
    """Remove shuffled interior walls whenever they join two separate regions."""

    algorithm = GenerationAlgorithm.KRUSKAL

    def carve(self, grid: Grid) -> List[Position]:
        walls: List[Tuple[Position, Position]] = []
        for row in range(grid.height):
            for col in range(grid.width - 1):
                walls.append((Position(row, col), Position(row, col + 1)))
        for row in range(grid.height - 1):
            for col in range(grid.width):
                walls.append((Position(row, col), Position(row + 1, col)))
        self._rng.shuffle(walls)

        sets = DisjointSet(grid.cell_count)
        order: List[Position] = []
        seen: Set[Position] = set()
        for a, b in walls:
            if not sets.union(a.row * grid.width + a.col, b.row * grid.width + b.col):
                continue
            grid.remove_wall_between(a, b)
            for position in (a, b):
                if position not in seen:
                    seen.add(position)
                    order.append(position)
        return order


__all__ = ["DisjointSet", "KruskalGenerator"]
