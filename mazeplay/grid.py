"""Grid and wall model shared by the generation and solving algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np


class Position(NamedTuple):
    row: int
    col: int

    def to_dict(self) -> dict:
        return {"row": int(self.row), "col": int(self.col)}


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self.value + 2) % 4)

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def key(self) -> str:
        return self.name.lower()


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (1, 0),
    Direction.WEST: (0, -1),
}


@dataclass(frozen=True)
class WallIdentifier:
    """Names one side of one cell."""

    position: Position
    direction: Direction

    def to_dict(self) -> dict:
        return {"position": self.position.to_dict(), "wall": self.direction.key}


@dataclass(frozen=True)
class Cell:
    """Read-only view of a single cell's flags, in N/E/S/W order."""

    visited: bool
    walls: Tuple[bool, bool, bool, bool]
    colored_walls: Tuple[bool, bool, bool, bool]

    def has_wall(self, direction: Direction) -> bool:
        return self.walls[direction]

    def to_dict(self) -> dict:
        return {
            "visited": self.visited,
            "walls": {d.key: self.walls[d] for d in Direction},
            "colored_walls": {d.key: self.colored_walls[d] for d in Direction},
        }


def is_adjacent(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def direction_between(a: Tuple[int, int], b: Tuple[int, int]) -> Optional[Direction]:
    """Direction from ``a`` toward ``b``, or None when they are not orthogonal neighbours."""

    delta = (b[0] - a[0], b[1] - a[1])
    for direction, offset in _DELTAS.items():
        if offset == delta:
            return direction
    return None


class Grid:
    """Rectangular maze grid.

    Wall, colour and visited flags live in numpy arrays indexed ``[row, col]``
    (plus a trailing direction axis for walls). Every wall mutator writes both
    sides of a wall so the flags stay symmetric after each call. Pairs that are
    not orthogonal neighbours, or that fall outside the grid, are treated as
    separated by a wall and are never modified.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        walls: Optional[np.ndarray] = None,
        colored: Optional[np.ndarray] = None,
        visited: Optional[np.ndarray] = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError("width and height must be at least 1")
        self.width = int(width)
        self.height = int(height)
        self.walls = np.ones((self.height, self.width, 4), dtype=bool) if walls is None else walls
        self.colored = np.zeros((self.height, self.width, 4), dtype=bool) if colored is None else colored
        self.visited = np.zeros((self.height, self.width), dtype=bool) if visited is None else visited

    @classmethod
    def create(cls, width: int, height: int) -> "Grid":
        """Grid with every wall of every cell present."""

        return cls(width, height)

    @classmethod
    def create_empty(cls, width: int, height: int) -> "Grid":
        """Grid with only the outer boundary walls present."""

        grid = cls(width, height)
        grid.walls[:] = False
        grid.walls[0, :, Direction.NORTH] = True
        grid.walls[-1, :, Direction.SOUTH] = True
        grid.walls[:, 0, Direction.WEST] = True
        grid.walls[:, -1, Direction.EAST] = True
        return grid

    # ------------------------------------------------------------------

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    @property
    def read_only(self) -> bool:
        return not self.walls.flags.writeable

    def in_bounds(self, position: Tuple[int, int]) -> bool:
        row, col = position
        return 0 <= row < self.height and 0 <= col < self.width

    def positions(self) -> List[Position]:
        return [Position(row, col) for row in range(self.height) for col in range(self.width)]

    def cell(self, position: Tuple[int, int]) -> Cell:
        row, col = position
        return Cell(
            visited=bool(self.visited[row, col]),
            walls=tuple(bool(flag) for flag in self.walls[row, col]),
            colored_walls=tuple(bool(flag) for flag in self.colored[row, col]),
        )

    def neighbors(self, position: Tuple[int, int], unvisited_only: bool = False) -> List[Position]:
        """Orthogonal neighbours in N, E, S, W order."""

        row, col = position
        result: List[Position] = []
        for dr, dc in _DELTAS.values():
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.height and 0 <= nc < self.width:
                if unvisited_only and self.visited[nr, nc]:
                    continue
                result.append(Position(nr, nc))
        return result

    def is_visited(self, position: Tuple[int, int]) -> bool:
        return bool(self.visited[position[0], position[1]])

    def mark_visited(self, position: Tuple[int, int]) -> None:
        self.visited[position[0], position[1]] = True

    # ------------------------------------------------------------------

    def has_wall_between(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        direction = direction_between(a, b)
        if direction is None or not (self.in_bounds(a) and self.in_bounds(b)):
            return True
        return bool(self.walls[a[0], a[1], direction] or self.walls[b[0], b[1], direction.opposite])

    def remove_wall_between(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        return self._set_wall_between(a, b, False)

    def add_wall_between(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        return self._set_wall_between(a, b, True)

    def _set_wall_between(self, a: Tuple[int, int], b: Tuple[int, int], present: bool) -> bool:
        direction = direction_between(a, b)
        if direction is None or not (self.in_bounds(a) and self.in_bounds(b)):
            return False
        self.walls[a[0], a[1], direction] = present
        self.walls[b[0], b[1], direction.opposite] = present
        return True

    def color_all_walls_of_cell(self, position: Tuple[int, int]) -> List[WallIdentifier]:
        """Colour every real wall of a cell and its mirror side on the neighbour.

        Returns one identifier per real wall of the cell, including sides that
        were already coloured.
        """

        if not self.in_bounds(position):
            return []
        row, col = position
        touched: List[WallIdentifier] = []
        for direction, (dr, dc) in _DELTAS.items():
            if not self.walls[row, col, direction]:
                continue
            self.colored[row, col, direction] = True
            touched.append(WallIdentifier(Position(row, col), direction))
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.height and 0 <= nc < self.width:
                self.colored[nr, nc, direction.opposite] = True
        return touched

    def color_all_walls(self) -> None:
        self.colored[:] = self.walls

    def uncolor_all_walls(self) -> None:
        self.colored[:] = False

    def reset_annotations(self) -> None:
        self.visited[:] = False
        self.colored[:] = False

    # ------------------------------------------------------------------

    def open_edges(self) -> List[Tuple[Position, Position]]:
        edges: List[Tuple[Position, Position]] = []
        for row in range(self.height):
            for col in range(self.width):
                if col < self.width - 1 and not self.walls[row, col, Direction.EAST]:
                    edges.append((Position(row, col), Position(row, col + 1)))
                if row < self.height - 1 and not self.walls[row, col, Direction.SOUTH]:
                    edges.append((Position(row, col), Position(row + 1, col)))
        return edges

    def open_edge_count(self) -> int:
        horizontal = np.count_nonzero(~self.walls[:, :-1, Direction.EAST])
        vertical = np.count_nonzero(~self.walls[:-1, :, Direction.SOUTH])
        return int(horizontal + vertical)

    def boundary_intact(self) -> bool:
        return bool(
            self.walls[0, :, Direction.NORTH].all()
            and self.walls[-1, :, Direction.SOUTH].all()
            and self.walls[:, 0, Direction.WEST].all()
            and self.walls[:, -1, Direction.EAST].all()
        )

    def is_symmetric(self) -> bool:
        horizontal = np.array_equal(self.walls[:, :-1, Direction.EAST], self.walls[:, 1:, Direction.WEST])
        vertical = np.array_equal(self.walls[:-1, :, Direction.SOUTH], self.walls[1:, :, Direction.NORTH])
        return bool(horizontal and vertical)

    def wall_identifiers(self) -> List[WallIdentifier]:
        return self._identifiers(self.walls)

    def colored_wall_identifiers(self) -> List[WallIdentifier]:
        return self._identifiers(self.colored)

    @staticmethod
    def _identifiers(flags: np.ndarray) -> List[WallIdentifier]:
        return [
            WallIdentifier(Position(int(row), int(col)), Direction(int(side)))
            for row, col, side in np.argwhere(flags)
        ]

    # ------------------------------------------------------------------

    def copy(self, *, read_only: bool = False) -> "Grid":
        clone = Grid(
            self.width,
            self.height,
            walls=self.walls.copy(),
            colored=self.colored.copy(),
            visited=self.visited.copy(),
        )
        if read_only:
            clone.freeze()
        return clone

    def freeze(self) -> None:
        for array in (self.walls, self.colored, self.visited):
            array.setflags(write=False)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "cells": [
                [self.cell((row, col)).to_dict() for col in range(self.width)]
                for row in range(self.height)
            ],
        }

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"


def create_grid(width: int, height: int) -> Grid:
    return Grid.create(width, height)


def create_empty_grid(width: int, height: int) -> Grid:
    return Grid.create_empty(width, height)


__all__ = [
    "Cell",
    "Direction",
    "Grid",
    "Position",
    "WallIdentifier",
    "create_empty_grid",
    "create_grid",
    "direction_between",
    "is_adjacent",
]
