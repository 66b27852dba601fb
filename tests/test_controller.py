import random
import unittest

from mazeplay.base import GenerationAlgorithm, Maze, SolvingAlgorithm
from mazeplay.controller import MazeController, Phase, StepKind
from mazeplay.grid import Direction, Position
from mazeplay.scheduler import TickScheduler
from mazeplay.solving import BreadthFirstSolver
from mazeplay.validation import evaluate_maze, is_valid_user_path


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _open_neighbor(grid, position):
    for direction in Direction:
        if not grid.walls[position.row, position.col, direction]:
            dr, dc = direction.delta
            return Position(position.row + dr, position.col + dc)
    return None


class ControllerTestCase(unittest.TestCase):
    def make(self, width=5, height=4, **kwargs) -> MazeController:
        kwargs.setdefault("seed", 3)
        kwargs.setdefault("animation_speed", 10)
        self.scheduler = TickScheduler()
        self.clock = FakeClock()
        return MazeController(width, height, scheduler=self.scheduler, clock=self.clock, **kwargs)

    def generated(self, **kwargs) -> MazeController:
        kwargs.setdefault("generation_animation", False)
        kwargs.setdefault("solving_animation", False)
        controller = self.make(**kwargs)
        controller.generate()
        self.assertIs(controller.phase, Phase.GENERATION_COMPLETE)
        return controller


class LifecycleTests(ControllerTestCase):
    def test_starts_idle(self) -> None:
        controller = self.make()
        self.assertIs(controller.phase, Phase.IDLE)
        self.assertIsNone(controller.grid)
        self.assertEqual(controller.generation_index, -1)
        self.assertEqual(controller.end, Position(3, 4))
        self.assertFalse(controller.solve())

    def test_animated_generation_plays_to_completion(self) -> None:
        controller = self.make()
        steps = controller.generate()
        self.assertEqual(len(steps), 5 * 4 + 1)
        self.assertIs(controller.phase, Phase.GENERATING)
        self.assertTrue(controller.playing)
        self.assertEqual(controller.generation_index, 0)

        self.scheduler.advance(10)
        self.assertEqual(controller.generation_index, 1)
        self.scheduler.advance(30)
        self.assertEqual(controller.generation_index, 4)

        self.scheduler.run_until_idle()
        self.assertIs(controller.phase, Phase.GENERATION_COMPLETE)
        self.assertFalse(controller.playing)
        self.assertEqual(controller.generation_index, len(steps) - 1)
        self.assertEqual(self.scheduler.pending, 0)
        self.assertTrue(evaluate_maze(controller.grid).is_perfect)

    def test_unanimated_generation_jumps_to_last_step(self) -> None:
        controller = self.generated()
        self.assertFalse(controller.playing)
        self.assertEqual(controller.generation_index, len(controller.generation_steps) - 1)
        self.assertIs(controller.grid, controller.final_grid)

    def test_single_cell_generation_completes_after_one_tick(self) -> None:
        controller = self.make(1, 1)
        controller.generate()
        self.scheduler.advance(10)
        self.assertIs(controller.phase, Phase.GENERATION_COMPLETE)
        controller.generate()
        self.assertEqual(self.scheduler.pending, 1)

    def test_solving_playback(self) -> None:
        controller = self.generated(solving_animation=True, solving_algorithm="bfs")
        self.assertTrue(controller.solve())
        self.assertIs(controller.phase, Phase.SOLVING)
        self.assertFalse(controller.solved)
        self.assertEqual(controller.solving_index, 0)
        self.scheduler.run_until_idle()
        self.assertIs(controller.phase, Phase.SOLVING_COMPLETE)
        self.assertTrue(controller.solved)
        final = controller.current_solving_step
        self.assertEqual(final.path[0], controller.start)
        self.assertEqual(final.path[-1], controller.end)
        self.assertFalse(controller.solve())

    def test_unanimated_solving_is_complete_immediately(self) -> None:
        controller = self.generated()
        controller.solve()
        self.assertIs(controller.phase, Phase.SOLVING_COMPLETE)
        self.assertTrue(controller.solved)
        self.assertEqual(self.scheduler.pending, 0)

    def test_same_seed_reproduces_the_maze(self) -> None:
        first = self.generated(generation_algorithm="kruskal", seed=9)
        second = self.generated(generation_algorithm="kruskal", seed=9)
        self.assertTrue((first.final_grid.walls == second.final_grid.walls).all())


class PlaybackControlTests(ControllerTestCase):
    def test_skip_to_end_cancels_pending_tick(self) -> None:
        controller = self.make()
        controller.generate()
        self.scheduler.advance(20)
        self.assertTrue(controller.skip_to_end(StepKind.GENERATION))
        self.assertIs(controller.phase, Phase.GENERATION_COMPLETE)
        self.assertEqual(self.scheduler.pending, 0)
        index = controller.generation_index
        self.scheduler.advance(100)
        self.assertEqual(controller.generation_index, index)

    def test_set_step_index_seeks_within_the_active_log(self) -> None:
        controller = self.generated()
        self.assertTrue(controller.set_step_index("generation", 2))
        self.assertIs(controller.phase, Phase.GENERATING)
        self.assertEqual(controller.generation_index, 2)
        self.assertFalse(controller.playing)

        self.assertFalse(controller.set_step_index("generation", 999))
        self.assertFalse(controller.set_step_index("generation", -1))
        self.assertFalse(controller.set_step_index("solving", 0))

        last = len(controller.generation_steps) - 1
        self.assertTrue(controller.set_step_index(StepKind.GENERATION, last))
        self.assertIs(controller.phase, Phase.GENERATION_COMPLETE)

    def test_seek_while_playing_keeps_playing(self) -> None:
        controller = self.make()
        controller.generate()
        controller.set_step_index(StepKind.GENERATION, 5)
        self.assertTrue(controller.playing)
        self.assertEqual(self.scheduler.pending, 1)
        self.scheduler.advance(10)
        self.assertEqual(controller.generation_index, 6)

    def test_seeking_back_in_the_solving_log_clears_solved(self) -> None:
        controller = self.generated()
        controller.solve()
        self.assertTrue(controller.solved)
        self.assertTrue(controller.set_step_index(StepKind.SOLVING, 0))
        self.assertIs(controller.phase, Phase.SOLVING)
        self.assertFalse(controller.solved)
        last = len(controller.solving_steps) - 1
        self.assertTrue(controller.set_step_index(StepKind.SOLVING, last))
        self.assertIs(controller.phase, Phase.SOLVING_COMPLETE)
        self.assertTrue(controller.solved)

    def test_seek_to_last_while_playing_stops(self) -> None:
        controller = self.make()
        steps = controller.generate()
        controller.set_step_index(StepKind.GENERATION, len(steps) - 1)
        self.assertFalse(controller.playing)
        self.assertEqual(self.scheduler.pending, 0)

    def test_toggle_playing(self) -> None:
        controller = self.make()
        controller.generate()
        self.assertFalse(controller.toggle_playing())
        self.assertEqual(self.scheduler.pending, 0)
        self.scheduler.advance(50)
        self.assertEqual(controller.generation_index, 0)
        self.assertTrue(controller.toggle_playing())
        self.scheduler.advance(10)
        self.assertEqual(controller.generation_index, 1)

    def test_changing_size_discards_everything(self) -> None:
        controller = self.make()
        controller.generate()
        controller.set_size(7, 6)
        self.assertIs(controller.phase, Phase.IDLE)
        self.assertEqual(controller.generation_steps, ())
        self.assertEqual(self.scheduler.pending, 0)
        self.assertEqual(controller.end, Position(5, 6))
        self.assertEqual(len(controller.generate()), 7 * 6 + 1)
        with self.assertRaises(ValueError):
            controller.set_size(0, 3)

    def test_changing_algorithm_stops_playback(self) -> None:
        controller = self.make()
        controller.generate()
        controller.set_generation_algorithm("prim")
        self.assertIs(controller.generation_algorithm, GenerationAlgorithm.PRIM)
        self.assertFalse(controller.playing)
        self.assertEqual(self.scheduler.pending, 0)
        controller.set_solving_algorithm(1)
        self.assertIs(controller.solving_algorithm, SolvingAlgorithm.BFS)
        with self.assertRaises(ValueError):
            controller.set_generation_algorithm("hunt_and_kill")

    def test_disabling_animation_stops_running_playback(self) -> None:
        controller = self.make()
        controller.generate()
        controller.set_animation_enabled("generation", False)
        self.assertFalse(controller.animation_enabled(StepKind.GENERATION))
        self.assertFalse(controller.playing)
        self.assertEqual(self.scheduler.pending, 0)

    def test_animation_speed_controls_tick_spacing(self) -> None:
        controller = self.make()
        controller.set_animation_speed(40)
        controller.generate()
        self.scheduler.advance(39)
        self.assertEqual(controller.generation_index, 0)
        self.scheduler.advance(1)
        self.assertEqual(controller.generation_index, 1)
        with self.assertRaises(ValueError):
            controller.set_animation_speed(-5)

    def test_close_cancels_pending_tick(self) -> None:
        controller = self.make()
        controller.generate()
        controller.close()
        self.assertEqual(self.scheduler.pending, 0)
        self.assertFalse(controller.playing)


class UserPathTests(ControllerTestCase):
    def test_path_must_start_at_start(self) -> None:
        controller = self.generated()
        self.assertFalse(controller.add_user_path((1, 1)))
        self.assertEqual(controller.user_path, [])
        self.assertTrue(controller.add_user_path((0, 0)))
        self.assertFalse(controller.add_user_path((0, 0)))
        self.assertEqual(controller.user_path, [Position(0, 0)])

    def test_revisiting_a_cell_truncates(self) -> None:
        controller = self.generated()
        grid = controller.final_grid
        controller.add_user_path(controller.start)
        step = _open_neighbor(grid, controller.start)
        self.assertTrue(controller.add_user_path(step))
        self.assertEqual(controller.user_path, [controller.start, step])
        self.assertTrue(controller.add_user_path(controller.start))
        self.assertEqual(controller.user_path, [controller.start])

    def test_walls_and_gaps_are_rejected(self) -> None:
        controller = self.generated()
        grid = controller.final_grid
        controller.add_user_path(controller.start)
        for direction in Direction:
            dr, dc = direction.delta
            target = Position(dr, dc)
            if grid.in_bounds(target) and grid.walls[0, 0, direction]:
                self.assertFalse(controller.add_user_path(target))
        self.assertFalse(controller.add_user_path((2, 2)))
        self.assertFalse(controller.add_user_path((10, 10)))
        self.assertEqual(controller.user_path, [controller.start])
        self.assertIsNone(controller.start_time)

    def test_walking_the_route_marks_solved(self) -> None:
        controller = self.generated()
        maze = Maze.from_grid(controller.final_grid, controller.start, controller.end)
        route = BreadthFirstSolver().solve(maze)[-1].path

        controller.add_user_path(route[0])
        self.assertIsNone(controller.elapsed())
        self.clock.now = 101.0
        controller.add_user_path(route[1])
        self.assertEqual(controller.start_time, 101.0)
        for position in route[2:-1]:
            controller.add_user_path(position)
            self.assertFalse(controller.solved)
        self.clock.now = 104.5
        self.assertEqual(controller.elapsed(), 3.5)
        controller.add_user_path(route[-1])
        self.assertTrue(controller.solved)
        self.assertEqual(controller.end_time, 104.5)
        self.clock.now = 200.0
        self.assertEqual(controller.elapsed(), 3.5)
        self.assertEqual(controller.user_path, list(route))

    def test_random_clicks_keep_the_path_valid(self) -> None:
        controller = self.generated(width=6, height=6)
        grid = controller.final_grid
        rng = random.Random(42)
        for _ in range(500):
            controller.add_user_path((rng.randrange(-1, 7), rng.randrange(-1, 7)))
            self.assertTrue(is_valid_user_path(grid, controller.user_path, controller.start))

    def test_user_path_needs_generation_complete(self) -> None:
        controller = self.make()
        controller.generate()
        self.assertFalse(controller.add_user_path((0, 0)))
        controller.skip_to_end("generation")
        controller.solve()
        self.assertFalse(controller.add_user_path((0, 0)))


class ResetTests(ControllerTestCase):
    def test_reset_current_keeps_the_maze(self) -> None:
        controller = self.generated()
        walls = controller.final_grid.walls
        controller.solve()
        controller.reset_current()
        self.assertIs(controller.phase, Phase.GENERATION_COMPLETE)
        self.assertEqual(controller.solving_steps, ())
        self.assertEqual(controller.solving_index, -1)
        self.assertFalse(controller.solved)
        self.assertIs(controller.final_grid.walls, walls)
        self.assertTrue(controller.add_user_path((0, 0)))
        controller.reset_current()
        self.assertEqual(controller.user_path, [])

    def test_reset_full_builds_a_new_maze(self) -> None:
        controller = self.generated()
        before = controller.generation_steps
        controller.add_user_path((0, 0))
        controller.reset_full()
        self.assertIsNot(controller.generation_steps[0], before[0])
        self.assertEqual(controller.user_path, [])
        self.assertIs(controller.phase, Phase.GENERATION_COMPLETE)

    def test_constructor_validates_arguments(self) -> None:
        with self.assertRaises(ValueError):
            MazeController(0, 5)
        with self.assertRaises(ValueError):
            MazeController(5, 5, animation_speed=-1)
        with self.assertRaises(ValueError):
            MazeController(5, 5, solving_algorithm="dijkstra")


if __name__ == "__main__":
    unittest.main()
