"""Recursive division maze generator."""

from __future__ import annotations

from typing import List, NamedTuple, Set

from ..base import AbstractMazeGenerator, GenerationAlgorithm
from ..grid import Grid, Position

MIN_CHAMBER = 2


class Chamber(NamedTuple):
    row: int
    col: int
    width: int
    height: int


class RecursiveDivisionGenerator(AbstractMazeGenerator):
    """Split open chambers with walls that each leave a single passage.

    Chambers are processed from an explicit worklist rather than by
    recursion, in the same depth-first order a recursive version would use.
    """

    algorithm = GenerationAlgorithm.RECURSIVE_DIVISION

    def create_grid(self, width: int, height: int) -> Grid:
        return Grid.create_empty(width, height)

    def carve(self, grid: Grid) -> List[Position]:
        order: List[Position] = []
        seen: Set[Position] = set()
        pending: List[Chamber] = [Chamber(0, 0, grid.width, grid.height)]

        def touch(position: Position) -> None:
            if position not in seen:
                seen.add(position)
                order.append(position)

        while pending:
            chamber = pending.pop()
            if chamber.width < MIN_CHAMBER or chamber.height < MIN_CHAMBER:
                continue
            if chamber.height != chamber.width:
                horizontal = chamber.height > chamber.width
            else:
                horizontal = self._rng.random() < 0.5

            if horizontal:
                # Wall runs along the north edge of ``split``.
                split = chamber.row + self._rng.randrange(chamber.height - 1) + 1
                passage = chamber.col + self._rng.randrange(chamber.width)
                for col in range(chamber.col, chamber.col + chamber.width):
                    if col == passage:
                        continue
                    above = Position(split - 1, col)
                    grid.add_wall_between(above, Position(split, col))
                    touch(above)
                first = Chamber(chamber.row, chamber.col, chamber.width, split - chamber.row)
                second = Chamber(split, chamber.col, chamber.width, chamber.row + chamber.height - split)
            else:
                # Wall runs along the west edge of ``split``.
                split = chamber.col + self._rng.randrange(chamber.width - 1) + 1
                passage = chamber.row + self._rng.randrange(chamber.height)
                for row in range(chamber.row, chamber.row + chamber.height):
                    if row == passage:
                        continue
                    left = Position(row, split - 1)
                    grid.add_wall_between(left, Position(row, split))
                    touch(left)
                first = Chamber(chamber.row, chamber.col, split - chamber.col, chamber.height)
                second = Chamber(chamber.row, split, chamber.col + chamber.width - split, chamber.height)

            pending.append(second)
            pending.append(first)
        return order


__all__ = ["Chamber", "RecursiveDivisionGenerator"]
