"""Replayable step records and the two-phase generation recorder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .grid import Grid, Position, WallIdentifier


@dataclass(frozen=True)
class GenerationStep:
    """Snapshot of the grid after one cell of the colouring pass."""

    cells: Grid
    current_cell: Optional[Position] = None
    visited_cells: Tuple[Position, ...] = ()
    colored_walls: Tuple[WallIdentifier, ...] = ()

    def to_dict(self) -> dict:
        return {
            "cells": self.cells.to_dict(),
            "current_cell": self.current_cell.to_dict() if self.current_cell else None,
            "visited_cells": [cell.to_dict() for cell in self.visited_cells],
            "colored_walls": [wall.to_dict() for wall in self.colored_walls],
        }


@dataclass(frozen=True)
class SolvingStep:
    """Explored set and the route from start to the current frontier cell."""

    visited_cells: Tuple[Position, ...]
    path: Tuple[Position, ...]
    current_cell: Optional[Position] = None

    def to_dict(self) -> dict:
        return {
            "visited_cells": [cell.to_dict() for cell in self.visited_cells],
            "path": [cell.to_dict() for cell in self.path],
            "current_cell": self.current_cell.to_dict() if self.current_cell else None,
        }


def record_generation_steps(grid: Grid, visit_order: Iterable[Tuple[int, int]]) -> List[GenerationStep]:
    """Replay a finished topology as a colouring trace.

    The grid's annotations are cleared first, so whatever working state the
    carving algorithm left behind is discarded. Positions from ``visit_order``
    are coloured in order; cells it never mentions follow in row-major order.
    Each cell is visited exactly once and produces one step, after an initial
    step holding the uncoloured topology.
    """

    grid.reset_annotations()
    walls = grid.walls.copy()
    walls.setflags(write=False)

    steps: List[GenerationStep] = [GenerationStep(cells=_snapshot(grid, walls))]
    visited: List[Position] = []

    for position in _completed_order(grid, visit_order):
        already = grid.colored[position.row, position.col].copy()
        grid.mark_visited(position)
        touched = grid.color_all_walls_of_cell(position)
        visited.append(position)
        steps.append(
            GenerationStep(
                cells=_snapshot(grid, walls),
                current_cell=position,
                visited_cells=tuple(visited),
                colored_walls=tuple(wall for wall in touched if not already[wall.direction]),
            )
        )
    return steps


def _completed_order(grid: Grid, visit_order: Iterable[Tuple[int, int]]) -> List[Position]:
    seen = set()
    order: List[Position] = []
    for raw in visit_order:
        position = Position(*raw)
        if position in seen or not grid.in_bounds(position):
            continue
        seen.add(position)
        order.append(position)
    # Catch-up sweep for cells the algorithm's own order never touched.
    for position in grid.positions():
        if position not in seen:
            order.append(position)
    return order


def _snapshot(grid: Grid, walls) -> Grid:
    # Topology is fixed during colouring, so every snapshot shares one frozen wall array.
    snapshot = Grid(
        grid.width,
        grid.height,
        walls=walls,
        colored=grid.colored.copy(),
        visited=grid.visited.copy(),
    )
    snapshot.freeze()
    return snapshot


__all__ = ["GenerationStep", "SolvingStep", "record_generation_steps"]
