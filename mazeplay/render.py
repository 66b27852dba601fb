"""Text and image snapshots of a maze grid."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from .grid import Direction, Grid, Position

HORIZONTAL_WALL = "─"
VERTICAL_WALL = "│"
INTERSECTION = "┼"
EMPTY = " "
CELL_MARK = "·"
PATH_MARK = "*"

BACKGROUND_COLOR = (255, 255, 255)
WALL_COLOR = (0, 0, 0)
VISITED_COLOR = (205, 220, 245)
START_COLOR = (40, 180, 80)
END_COLOR = (220, 30, 30)
LINE_COLOR = (220, 0, 0)


def grid_to_ascii(
    grid: Grid,
    *,
    path: Optional[Iterable[Tuple[int, int]]] = None,
    colored_only: bool = False,
) -> str:
    """Box-drawing rendering; ``colored_only`` shows just the walls revealed so far."""

    walls = grid.colored if colored_only else grid.walls
    marked = {Position(*p) for p in path} if path else set()
    canvas: List[List[str]] = [[EMPTY] * (grid.width * 2 + 1) for _ in range(grid.height * 2 + 1)]

    for y in range(0, grid.height * 2 + 1, 2):
        for x in range(0, grid.width * 2 + 1, 2):
            canvas[y][x] = INTERSECTION

    for row in range(grid.height):
        for col in range(grid.width):
            y, x = row * 2 + 1, col * 2 + 1
            canvas[y][x] = PATH_MARK if (row, col) in marked else CELL_MARK
            if walls[row, col, Direction.NORTH]:
                canvas[y - 1][x] = HORIZONTAL_WALL
            if walls[row, col, Direction.SOUTH]:
                canvas[y + 1][x] = HORIZONTAL_WALL
            if walls[row, col, Direction.WEST]:
                canvas[y][x - 1] = VERTICAL_WALL
            if walls[row, col, Direction.EAST]:
                canvas[y][x + 1] = VERTICAL_WALL
    return "\n".join("".join(line) for line in canvas)


def render_grid(
    grid: Grid,
    *,
    cell_size: int = 24,
    wall_width: int = 2,
    start: Optional[Tuple[int, int]] = None,
    end: Optional[Tuple[int, int]] = None,
    path: Optional[Sequence[Tuple[int, int]]] = None,
    visited: Optional[Iterable[Tuple[int, int]]] = None,
    colored_only: bool = False,
) -> Image.Image:
    """Draw the grid with Pillow.

    The maze is inset by ``wall_width`` pixels so boundary walls are fully
    visible. Cell ``(row, col)`` occupies the box starting at
    ``(wall_width + col * cell_size, wall_width + row * cell_size)``.
    """

    if cell_size < 4:
        raise ValueError("cell_size must be at least 4")
    inset = wall_width
    canvas_dims = (grid.width * cell_size + inset * 2, grid.height * cell_size + inset * 2)
    canvas = Image.new("RGB", canvas_dims, BACKGROUND_COLOR)
    draw = ImageDraw.Draw(canvas)

    for cell in visited or ():
        _fill_cell(draw, cell, cell_size, inset, VISITED_COLOR)
    if start is not None:
        _fill_cell(draw, start, cell_size, inset, START_COLOR)
    if end is not None:
        _fill_cell(draw, end, cell_size, inset, END_COLOR)

    walls = grid.colored if colored_only else grid.walls
    for row in range(grid.height):
        for col in range(grid.width):
            left = inset + col * cell_size
            top = inset + row * cell_size
            right = left + cell_size
            bottom = top + cell_size
            # South and east sides are drawn by the neighbour, except on the boundary.
            if walls[row, col, Direction.NORTH]:
                draw.line((left, top, right, top), fill=WALL_COLOR, width=wall_width)
            if walls[row, col, Direction.WEST]:
                draw.line((left, top, left, bottom), fill=WALL_COLOR, width=wall_width)
            if row == grid.height - 1 and walls[row, col, Direction.SOUTH]:
                draw.line((left, bottom, right, bottom), fill=WALL_COLOR, width=wall_width)
            if col == grid.width - 1 and walls[row, col, Direction.EAST]:
                draw.line((right, top, right, bottom), fill=WALL_COLOR, width=wall_width)

    if path:
        thickness = max(2, cell_size // 4)
        points = [
            (inset + c * cell_size + cell_size / 2, inset + r * cell_size + cell_size / 2)
            for r, c in path
        ]
        if len(points) >= 2:
            draw.line(points, fill=LINE_COLOR, width=thickness, joint="curve")
        else:
            x, y = points[0]
            draw.ellipse(
                (x - thickness / 2, y - thickness / 2, x + thickness / 2, y + thickness / 2),
                fill=LINE_COLOR,
            )
    return canvas


def _fill_cell(
    draw: ImageDraw.ImageDraw,
    cell: Tuple[int, int],
    cell_size: int,
    inset: int,
    color: Tuple[int, int, int],
) -> None:
    row, col = cell
    left = inset + col * cell_size
    top = inset + row * cell_size
    draw.rectangle((left, top, left + cell_size - 1, top + cell_size - 1), fill=color)


__all__ = ["grid_to_ascii", "render_grid"]
