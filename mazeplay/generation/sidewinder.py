"""Sidewinder maze generator."""

from __future__ import annotations

import random
from typing import List, Optional

from ..base import AbstractMazeGenerator, GenerationAlgorithm, check_probability
from ..grid import Grid, Position

CLOSE_PROBABILITY = 0.5


class SidewinderGenerator(AbstractMazeGenerator):
    """Row-by-row runs that close by opening north from a random member."""

    algorithm = GenerationAlgorithm.SIDEWINDER

    def __init__(
        self,
        *,
        close_probability: float = CLOSE_PROBABILITY,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(seed=seed, rng=rng)
        self.close_probability = check_probability("close_probability", close_probability)

    def carve(self, grid: Grid) -> List[Position]:
        # The top row has nothing to the north, so it is one long corridor.
        for col in range(grid.width - 1):
            grid.remove_wall_between(Position(0, col), Position(0, col + 1))

        for row in range(1, grid.height):
            run: List[Position] = []
            for col in range(grid.width):
                current = Position(row, col)
                run.append(current)
                at_east_edge = col == grid.width - 1
                if at_east_edge or self._rng.random() < self.close_probability:
                    member = self._rng.choice(run)
                    grid.remove_wall_between(member, Position(member.row - 1, member.col))
                    run = []
                else:
                    grid.remove_wall_between(current, Position(row, col + 1))
        return grid.positions()


__all__ = ["SidewinderGenerator", "CLOSE_PROBABILITY"]
