"""Replay controller: sequences step logs, paces playback and tracks the user path."""

from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from .base import AlgorithmId, GenerationAlgorithm, Maze, SolvingAlgorithm, resolve_algorithm
from .generation import get_generator
from .grid import Grid, Position, is_adjacent
from .scheduler import TickHandle, TickScheduler
from .solving import get_solver
from .steps import GenerationStep, SolvingStep

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 15
DEFAULT_ANIMATION_SPEED_MS = 10


class Phase(Enum):
    IDLE = "idle"
    GENERATING = "generating"
    GENERATION_COMPLETE = "generation_complete"
    SOLVING = "solving"
    SOLVING_COMPLETE = "solving_complete"


class StepKind(Enum):
    GENERATION = "generation"
    SOLVING = "solving"


_ACTIVE_PHASES = {
    StepKind.GENERATION: (Phase.GENERATING, Phase.GENERATION_COMPLETE),
    StepKind.SOLVING: (Phase.SOLVING, Phase.SOLVING_COMPLETE),
}
_RUNNING = {StepKind.GENERATION: Phase.GENERATING, StepKind.SOLVING: Phase.SOLVING}
_COMPLETE = {StepKind.GENERATION: Phase.GENERATION_COMPLETE, StepKind.SOLVING: Phase.SOLVING_COMPLETE}


def _check_size(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise ValueError("width and height must be at least 1")


def _check_speed(speed: float) -> float:
    if speed < 0:
        raise ValueError("animation speed must be non-negative")
    return speed


class MazeController:
    """State machine driving generation, solving and interactive path drawing.

    Step logs are computed eagerly; playback only moves an index forward on
    scheduler ticks. The controller owns the grid: renderers read
    :attr:`grid` (an immutable snapshot) and issue commands through the
    public methods. Commands that are not legal in the current phase are
    ignored and return False.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        generation_algorithm: AlgorithmId = GenerationAlgorithm.DFS,
        solving_algorithm: AlgorithmId = SolvingAlgorithm.DFS,
        animation_speed: float = DEFAULT_ANIMATION_SPEED_MS,
        generation_animation: bool = True,
        solving_animation: bool = True,
        scheduler: Optional[TickScheduler] = None,
        clock: Callable[[], float] = time.monotonic,
        seed: Optional[int] = None,
    ) -> None:
        _check_size(width, height)
        self._width = width
        self._height = height
        self.start = Position(0, 0)
        self.end = Position(height - 1, width - 1)
        self.generation_algorithm = resolve_algorithm(GenerationAlgorithm, generation_algorithm)
        self.solving_algorithm = resolve_algorithm(SolvingAlgorithm, solving_algorithm)
        self._animation_speed = _check_speed(animation_speed)
        self._animation_enabled = {
            StepKind.GENERATION: generation_animation,
            StepKind.SOLVING: solving_animation,
        }
        self.scheduler = scheduler if scheduler is not None else TickScheduler()
        self._clock = clock
        self._rng = random.Random(seed)
        self._pending: Optional[TickHandle] = None
        self._discard()

    def _discard(self) -> None:
        self._phase = Phase.IDLE
        self._generation_steps: List[GenerationStep] = []
        self._solving_steps: List[SolvingStep] = []
        self._generation_index = -1
        self._solving_index = -1
        self._user_path: List[Position] = []
        self._playing = False
        self._solved = False
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None

    # ------------------------------------------------------------------
    # Read surface

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def solved(self) -> bool:
        return self._solved

    @property
    def animation_speed(self) -> float:
        return self._animation_speed

    @property
    def generation_steps(self) -> Tuple[GenerationStep, ...]:
        return tuple(self._generation_steps)

    @property
    def solving_steps(self) -> Tuple[SolvingStep, ...]:
        return tuple(self._solving_steps)

    @property
    def generation_index(self) -> int:
        return self._generation_index

    @property
    def solving_index(self) -> int:
        return self._solving_index

    @property
    def current_generation_step(self) -> Optional[GenerationStep]:
        if self._generation_index < 0:
            return None
        return self._generation_steps[self._generation_index]

    @property
    def current_solving_step(self) -> Optional[SolvingStep]:
        if self._solving_index < 0:
            return None
        return self._solving_steps[self._solving_index]

    @property
    def grid(self) -> Optional[Grid]:
        """Grid snapshot for the generation step currently on display."""

        step = self.current_generation_step
        return step.cells if step is not None else None

    @property
    def final_grid(self) -> Optional[Grid]:
        return self._generation_steps[-1].cells if self._generation_steps else None

    @property
    def user_path(self) -> List[Position]:
        return list(self._user_path)

    @property
    def start_time(self) -> Optional[float]:
        return self._start_time

    @property
    def end_time(self) -> Optional[float]:
        return self._end_time

    def elapsed(self) -> Optional[float]:
        """Seconds spent drawing the user path, still running until ``end`` is reached."""

        if self._start_time is None:
            return None
        finish = self._end_time if self._end_time is not None else self._clock()
        return finish - self._start_time

    def animation_enabled(self, kind: Union[StepKind, str]) -> bool:
        return self._animation_enabled[StepKind(kind)]

    # ------------------------------------------------------------------
    # Configuration

    def set_size(self, width: int, height: int) -> None:
        _check_size(width, height)
        self._cancel_tick()
        self._width = width
        self._height = height
        self.end = Position(height - 1, width - 1)
        self._discard()

    def set_generation_algorithm(self, algorithm: AlgorithmId) -> None:
        self.generation_algorithm = resolve_algorithm(GenerationAlgorithm, algorithm)
        self._stop_playback()

    def set_solving_algorithm(self, algorithm: AlgorithmId) -> None:
        self.solving_algorithm = resolve_algorithm(SolvingAlgorithm, algorithm)
        self._stop_playback()

    def set_animation_enabled(self, kind: Union[StepKind, str], enabled: bool) -> None:
        kind = StepKind(kind)
        self._animation_enabled[kind] = enabled
        if not enabled and self._phase is _RUNNING[kind]:
            self._stop_playback()

    def set_animation_speed(self, speed: float) -> None:
        self._animation_speed = _check_speed(speed)

    # ------------------------------------------------------------------
    # Generation and solving

    def generate(self) -> List[GenerationStep]:
        """Discard all state, build a new generation log and start replaying it."""

        self._cancel_tick()
        self._discard()
        generator = get_generator(self.generation_algorithm, rng=self._rng)
        self._generation_steps = generator.generate(self._width, self._height)
        logger.info(
            "Generated %dx%d maze with %s (%d steps)",
            self._width,
            self._height,
            self.generation_algorithm.name,
            len(self._generation_steps),
        )
        self._enter(StepKind.GENERATION)
        return self._generation_steps

    def solve(self) -> bool:
        if self._phase is not Phase.GENERATION_COMPLETE:
            logger.debug("solve() ignored in phase %s", self._phase.value)
            return False
        self._cancel_tick()
        maze = Maze.from_grid(self.final_grid, self.start, self.end)
        self._solving_steps = get_solver(self.solving_algorithm).solve(maze)
        self._user_path = []
        self._start_time = None
        self._end_time = None
        self._solved = False
        logger.info(
            "Solved with %s: %d steps, path length %d",
            self.solving_algorithm.name,
            len(self._solving_steps),
            len(self._solving_steps[-1].path),
        )
        self._enter(StepKind.SOLVING)
        return True

    def _enter(self, kind: StepKind) -> None:
        if self._animation_enabled[kind]:
            self._apply_index(kind, 0)
            if self._phase is _RUNNING[kind]:
                self._playing = True
                self._schedule_tick()
        else:
            self._apply_index(kind, len(self._steps(kind)) - 1)

    # ------------------------------------------------------------------
    # Playback

    def set_step_index(self, kind: Union[StepKind, str], index: int) -> bool:
        kind = StepKind(kind)
        if self._phase not in _ACTIVE_PHASES[kind]:
            return False
        if not 0 <= index < len(self._steps(kind)):
            return False
        self._apply_index(kind, index)
        if self._playing:
            if self._phase is _RUNNING[kind]:
                self._schedule_tick()
            else:
                self._stop_playback()
        return True

    def skip_to_end(self, kind: Union[StepKind, str]) -> bool:
        kind = StepKind(kind)
        if self._phase not in _ACTIVE_PHASES[kind]:
            return False
        self._stop_playback()
        self._apply_index(kind, len(self._steps(kind)) - 1)
        return True

    def toggle_playing(self) -> bool:
        if self._phase in (Phase.GENERATING, Phase.SOLVING) and not self._playing:
            self._playing = True
            self._schedule_tick()
        else:
            self._stop_playback()
        return self._playing

    def _on_tick(self) -> None:
        self._pending = None
        kind = self._running_kind()
        if kind is None or not self._playing:
            self._playing = False
            return
        self._apply_index(kind, self._index(kind) + 1)
        if self._phase is _RUNNING[kind]:
            self._schedule_tick()
        else:
            self._playing = False

    def _apply_index(self, kind: StepKind, index: int) -> None:
        last = len(self._steps(kind)) - 1
        if kind is StepKind.GENERATION:
            self._generation_index = index
        else:
            self._solving_index = index
            self._solved = index == last
        self._phase = _RUNNING[kind] if index < last else _COMPLETE[kind]

    def _running_kind(self) -> Optional[StepKind]:
        for kind, phase in _RUNNING.items():
            if self._phase is phase:
                return kind
        return None

    def _steps(self, kind: StepKind) -> list:
        return self._generation_steps if kind is StepKind.GENERATION else self._solving_steps

    def _index(self, kind: StepKind) -> int:
        return self._generation_index if kind is StepKind.GENERATION else self._solving_index

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._pending = self.scheduler.call_later(self._animation_speed, self._on_tick)

    def _cancel_tick(self) -> None:
        self.scheduler.cancel(self._pending)
        self._pending = None

    def _stop_playback(self) -> None:
        self._cancel_tick()
        self._playing = False

    # ------------------------------------------------------------------
    # User path

    def add_user_path(self, position: Tuple[int, int]) -> bool:
        """Extend, truncate or start the user path; returns True if it changed."""

        if self._phase is not Phase.GENERATION_COMPLETE:
            return False
        grid = self.final_grid
        position = Position(*position)
        if not grid.in_bounds(position):
            return False

        path = self._user_path
        if not path:
            if position != self.start:
                return False
            path.append(position)
            return True

        if position in path:
            index = path.index(position)
            if index == len(path) - 1:
                return False
            del path[index + 1:]
            return True

        last = path[-1]
        if not is_adjacent(last, position) or grid.has_wall_between(last, position):
            return False
        path.append(position)
        if self._start_time is None:
            self._start_time = self._clock()
        if position == self.end and not self._solved:
            self._solved = True
            self._end_time = self._clock()
            logger.info("User path reached the end in %.2fs", self._end_time - self._start_time)
        return True

    def clear_user_path(self) -> None:
        self._user_path = []
        self._solved = False
        self._start_time = None
        self._end_time = None

    # ------------------------------------------------------------------
    # Resets

    def reset_current(self) -> None:
        """Drop the user path and solving log but keep the generated maze."""

        if self._phase in _ACTIVE_PHASES[StepKind.SOLVING]:
            self._stop_playback()
            self._phase = Phase.GENERATION_COMPLETE
        self._solving_steps = []
        self._solving_index = -1
        self.clear_user_path()

    def reset_full(self) -> List[GenerationStep]:
        return self.generate()

    def close(self) -> None:
        self._stop_playback()


__all__ = [
    "DEFAULT_ANIMATION_SPEED_MS",
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "MazeController",
    "Phase",
    "StepKind",
]
