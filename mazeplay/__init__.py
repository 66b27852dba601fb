"""Maze generation, solving and step-log replay engine."""

__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "Cell",
    "Direction",
    "GenerationAlgorithm",
    "GenerationStep",
    "Grid",
    "Maze",
    "MazeController",
    "MazeReport",
    "Phase",
    "Position",
    "SolvingAlgorithm",
    "SolvingStep",
    "StepKind",
    "TickScheduler",
    "WallIdentifier",
    "create_empty_grid",
    "create_grid",
    "evaluate_maze",
    "get_generator",
    "get_solver",
    "grid_to_ascii",
    "render_grid",
]

from .base import AbstractMazeGenerator, AbstractMazeSolver, GenerationAlgorithm, Maze, SolvingAlgorithm
from .grid import Cell, Direction, Grid, Position, WallIdentifier, create_empty_grid, create_grid
from .steps import GenerationStep, SolvingStep
from .generation import get_generator
from .solving import get_solver
from .scheduler import TickScheduler
from .controller import MazeController, Phase, StepKind
from .validation import MazeReport, evaluate_maze
from .render import grid_to_ascii, render_grid
