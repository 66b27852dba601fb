import unittest

import numpy as np

from mazeplay.base import GenerationAlgorithm
from mazeplay.generation import (
    GENERATORS,
    AldousBroderGenerator,
    BinaryTreeGenerator,
    DisjointSet,
    EllerGenerator,
    RecursiveDivisionGenerator,
    SidewinderGenerator,
    get_generator,
)
from mazeplay.grid import Direction
from mazeplay.validation import evaluate_maze, reachable_cells

SIZES = [(2, 2), (5, 3), (3, 7), (10, 10), (1, 4), (4, 1), (1, 1)]


class PerfectMazeTests(unittest.TestCase):
    def test_every_generator_builds_a_spanning_tree(self) -> None:
        for algorithm in GenerationAlgorithm:
            for width, height in SIZES:
                for seed in (0, 1, 7):
                    with self.subTest(algorithm=algorithm.name, size=(width, height), seed=seed):
                        grid = get_generator(algorithm, seed=seed).build(width, height)
                        self.assertEqual(grid.open_edge_count(), width * height - 1)
                        self.assertEqual(len(reachable_cells(grid)), width * height)
                        self.assertTrue(grid.boundary_intact())
                        self.assertTrue(grid.is_symmetric())
                        self.assertTrue(evaluate_maze(grid).is_perfect)

    def test_two_by_two_mazes_have_three_passages(self) -> None:
        for algorithm in GenerationAlgorithm:
            with self.subTest(algorithm=algorithm.name):
                steps = get_generator(algorithm, seed=3).generate(2, 2)
                grid = steps[-1].cells
                self.assertEqual(grid.open_edge_count(), 3)
                self.assertEqual(len(reachable_cells(grid, (1, 1))), 4)

    def test_same_seed_same_maze(self) -> None:
        for algorithm in GenerationAlgorithm:
            with self.subTest(algorithm=algorithm.name):
                first = get_generator(algorithm, seed=42).generate(8, 6)
                second = get_generator(algorithm, seed=42).generate(8, 6)
                self.assertTrue(np.array_equal(first[-1].cells.walls, second[-1].cells.walls))
                self.assertEqual(first[-1].visited_cells, second[-1].visited_cells)

    def test_generate_leaves_topology_identical_to_build(self) -> None:
        steps = AldousBroderGenerator(seed=9).generate(6, 6)
        grid = AldousBroderGenerator(seed=9).build(6, 6)
        self.assertTrue(np.array_equal(steps[0].cells.walls, grid.walls))


class AlgorithmShapeTests(unittest.TestCase):
    def test_binary_tree_always_north_opens_every_column(self) -> None:
        grid = BinaryTreeGenerator(north_probability=1.0, seed=1).build(5, 4)
        self.assertFalse(grid.walls[1:, :, Direction.NORTH].any())
        self.assertFalse(grid.walls[0, :-1, Direction.EAST].any())
        # Only the top row runs east-west.
        self.assertTrue(grid.walls[1:, :-1, Direction.EAST].all())

    def test_sidewinder_top_row_is_one_corridor(self) -> None:
        grid = SidewinderGenerator(seed=5).build(7, 5)
        self.assertFalse(grid.walls[0, :-1, Direction.EAST].any())

    def test_sidewinder_always_closing_opens_every_north_wall(self) -> None:
        grid = SidewinderGenerator(close_probability=1.0, seed=5).build(4, 4)
        self.assertFalse(grid.walls[1:, :, Direction.NORTH].any())

    def test_recursive_division_starts_from_an_open_chamber(self) -> None:
        grid = RecursiveDivisionGenerator().create_grid(3, 3)
        self.assertEqual(grid.open_edge_count(), 12)
        self.assertTrue(grid.boundary_intact())

    def test_probabilities_are_validated(self) -> None:
        with self.assertRaises(ValueError):
            EllerGenerator(merge_probability=1.5)
        with self.assertRaises(ValueError):
            BinaryTreeGenerator(north_probability=-0.1)
        with self.assertRaises(ValueError):
            SidewinderGenerator(close_probability=2)


class RegistryTests(unittest.TestCase):
    def test_lookup_by_member_id_and_name(self) -> None:
        self.assertIsInstance(get_generator("recursive-division"), RecursiveDivisionGenerator)
        self.assertIsInstance(get_generator("Aldous_Broder"), AldousBroderGenerator)
        self.assertIsInstance(get_generator(3), EllerGenerator)
        self.assertIsInstance(get_generator(GenerationAlgorithm.BINARY_TREE), BinaryTreeGenerator)
        self.assertEqual(set(GENERATORS), set(GenerationAlgorithm))
        for algorithm, cls in GENERATORS.items():
            self.assertIs(cls.algorithm, algorithm)

    def test_unknown_algorithm_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            get_generator("wilson")
        with self.assertRaises(ValueError):
            get_generator(99)


class DisjointSetTests(unittest.TestCase):
    def test_union_joins_once(self) -> None:
        sets = DisjointSet(5)
        self.assertTrue(sets.union(0, 1))
        self.assertTrue(sets.union(3, 4))
        self.assertFalse(sets.union(1, 0))
        self.assertEqual(sets.components, 3)
        self.assertTrue(sets.union(1, 4))
        self.assertTrue(sets.connected(0, 3))
        self.assertFalse(sets.connected(2, 0))
        self.assertEqual(sets.find(3), sets.find(0))


if __name__ == "__main__":
    unittest.main()
