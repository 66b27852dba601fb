#!/usr/bin/env python3
"""Generate a maze, optionally animate and solve it, then print and save the result."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazeplay import GenerationAlgorithm, MazeController, SolvingAlgorithm, evaluate_maze
from mazeplay.controller import DEFAULT_ANIMATION_SPEED_MS, DEFAULT_HEIGHT, DEFAULT_WIDTH
from mazeplay.render import grid_to_ascii, render_grid

logger = logging.getLogger("play_maze")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument(
        "--algorithm",
        type=str.lower,
        default="dfs",
        choices=[member.name.lower() for member in GenerationAlgorithm],
    )
    parser.add_argument(
        "--solver",
        type=str.lower,
        default="bfs",
        choices=[member.name.lower() for member in SolvingAlgorithm],
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--animate", action="store_true", help="Replay the step logs in real time")
    parser.add_argument("--speed", type=float, default=DEFAULT_ANIMATION_SPEED_MS, help="Milliseconds per step")
    parser.add_argument("--solve", action="store_true", help="Run the solver after generation")
    parser.add_argument("--output", type=Path, default=None, help="Optional PNG destination")
    parser.add_argument("--cell-size", type=int, default=24)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    controller = MazeController(
        args.width,
        args.height,
        generation_algorithm=args.algorithm,
        solving_algorithm=args.solver,
        animation_speed=args.speed,
        generation_animation=args.animate,
        solving_animation=args.animate,
        seed=args.seed,
    )
    controller.generate()
    controller.scheduler.run_until_idle(realtime=True)

    path = None
    if args.solve:
        controller.solve()
        controller.scheduler.run_until_idle(realtime=True)
        path = controller.current_solving_step.path
        if not path:
            logger.warning("Solver did not reach %s", controller.end)

    grid = controller.grid
    print(grid_to_ascii(grid, path=path))
    print(json.dumps(evaluate_maze(grid).to_dict(), indent=2))

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        image = render_grid(
            grid,
            cell_size=args.cell_size,
            start=controller.start,
            end=controller.end,
            path=path,
        )
        image.save(args.output)
        print(f"Wrote {args.output}")
    controller.close()


if __name__ == "__main__":
    main()
