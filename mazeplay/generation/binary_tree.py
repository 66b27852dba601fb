"""Binary tree maze generator."""

from __future__ import annotations

import random
from typing import List, Optional

from ..base import AbstractMazeGenerator, GenerationAlgorithm, check_probability
from ..grid import Grid, Position

NORTH_PROBABILITY = 0.5


class BinaryTreeGenerator(AbstractMazeGenerator):
    """Open either the north or the west wall of every cell.

    Cells on the top row can only open west and cells in the first column can
    only open north, which is what skews the corridors toward those edges.
    """

    algorithm = GenerationAlgorithm.BINARY_TREE

    def __init__(
        self,
        *,
        north_probability: float = NORTH_PROBABILITY,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(seed=seed, rng=rng)
        self.north_probability = check_probability("north_probability", north_probability)

    def carve(self, grid: Grid) -> List[Position]:
        for row in range(grid.height):
            for col in range(grid.width):
                current = Position(row, col)
                north = Position(row - 1, col) if row > 0 else None
                west = Position(row, col - 1) if col > 0 else None
                if north and west:
                    target = north if self._rng.random() < self.north_probability else west
                else:
                    target = north or west
                if target is not None:
                    grid.remove_wall_between(current, target)
        return grid.positions()


__all__ = ["BinaryTreeGenerator", "NORTH_PROBABILITY"]
