"""Eller's row-at-a-time maze generator."""

from __future__ import annotations

import random
from typing import Dict, List, Optional

from ..base import AbstractMazeGenerator, GenerationAlgorithm, check_probability
from ..grid import Grid, Position

MERGE_PROBABILITY = 0.3
VERTICAL_PROBABILITY = 0.4


class EllerGenerator(AbstractMazeGenerator):
    """Carry per-row set labels downward, one row at a time.

    Horizontal neighbours in different sets are merged at random, every set
    opens at least one passage to the row below, and the last row joins all
    remaining sets so the result is a single tree.
    """

    algorithm = GenerationAlgorithm.ELLER

    def __init__(
        self,
        *,
        merge_probability: float = MERGE_PROBABILITY,
        vertical_probability: float = VERTICAL_PROBABILITY,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(seed=seed, rng=rng)
        self.merge_probability = check_probability("merge_probability", merge_probability)
        self.vertical_probability = check_probability("vertical_probability", vertical_probability)

    def carve(self, grid: Grid) -> List[Position]:
        sets: List[int] = list(range(grid.width))
        next_label = grid.width

        for row in range(grid.height):
            last_row = row == grid.height - 1
            for col in range(grid.width - 1):
                if sets[col] == sets[col + 1]:
                    continue
                if last_row or self._rng.random() < self.merge_probability:
                    grid.remove_wall_between(Position(row, col), Position(row, col + 1))
                    self._relabel(sets, sets[col + 1], sets[col])
            if last_row:
                break

            members: Dict[int, List[int]] = {}
            for col, label in enumerate(sets):
                members.setdefault(label, []).append(col)

            below: Dict[int, int] = {}
            for label, cols in members.items():
                chosen = [col for col in cols if self._rng.random() < self.vertical_probability]
                if not chosen:
                    chosen = [self._rng.choice(cols)]
                for col in chosen:
                    grid.remove_wall_between(Position(row, col), Position(row + 1, col))
                    below[col] = label

            # Cells with no passage from above start fresh sets.
            next_sets: List[int] = []
            for col in range(grid.width):
                if col not in below:
                    below[col] = next_label
                    next_label += 1
                next_sets.append(below[col])
            sets = next_sets
        return grid.positions()

    @staticmethod
    def _relabel(sets: List[int], old: int, new: int) -> None:
        for index, label in enumerate(sets):
            if label == old:
                sets[index] = new


__all__ = ["EllerGenerator", "MERGE_PROBABILITY", "VERTICAL_PROBABILITY"]
