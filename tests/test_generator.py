import unittest
from collections import deque
from unittest import mock

from mazeplay.config import Door, MazeConfig
from mazeplay.errors import InvalidConfiguration, InvalidDimension
from mazeplay.generator import MazeGenerator, generate
from mazeplay.grid import Grid, Side


def _reachable(grid: Grid, start=(0, 0)) -> int:
    seen = {start}
    queue = deque([start])
    while queue:
        coord = queue.popleft()
        for side, target in grid.neighbors_of(*coord):
            if grid.passable(coord, side) and target not in seen:
                seen.add(target)
                queue.append(target)
    return len(seen)


class MazeGeneratorTests(unittest.TestCase):
    def _config(self, width: int, height: int, **kwargs) -> MazeConfig:
        return MazeConfig(width=width, height=height, **kwargs)

    def test_walls_are_removed_in_pairs(self) -> None:
        for seed in range(5):
            grid = MazeGenerator(self._config(9, 7), seed=seed).generate()
            walls = grid.walls_array()
            self.assertTrue((walls[:, :-1, Side.RIGHT] == walls[:, 1:, Side.LEFT]).all())
            self.assertTrue((walls[:-1, :, Side.BOTTOM] == walls[1:, :, Side.TOP]).all())

    def test_generated_maze_is_a_spanning_tree(self) -> None:
        for width, height in ((1, 2), (2, 1), (5, 5), (12, 3), (20, 17)):
            with self.subTest(size=(width, height)):
                grid = MazeGenerator(self._config(width, height), seed=width * 31 + height).generate()
                self.assertEqual(grid.internal_openings(), width * height - 1)
                self.assertEqual(_reachable(grid), width * height)

    def test_only_the_two_doors_are_open_on_the_boundary(self) -> None:
        config = self._config(
            6,
            4,
            entrance=Door.at_corner("bl", 6, 4, "bottom"),
            exit=Door.at_corner("tr", 6, 4, "top"),
        )
        grid = MazeGenerator(config, seed=3).generate()
        self.assertCountEqual(
            grid.boundary_openings(),
            [((0, 3), Side.BOTTOM), ((5, 0), Side.TOP)],
        )

    def test_two_cell_maze_opens_the_single_internal_wall(self) -> None:
        grid = generate(2, 1, ((0, 0), "left"), ((1, 0), "right"))
        self.assertFalse(grid[0, 0].walls[Side.RIGHT])
        self.assertFalse(grid[1, 0].walls[Side.LEFT])
        self.assertFalse(grid[0, 0].walls[Side.LEFT])
        self.assertFalse(grid[1, 0].walls[Side.RIGHT])
        self.assertTrue(grid[0, 0].walls[Side.TOP])
        self.assertTrue(grid[1, 0].walls[Side.BOTTOM])

    def test_entrance_equal_to_exit_fails_before_allocating(self) -> None:
        with mock.patch("mazeplay.generator.Grid.create") as create:
            with self.assertRaises(InvalidConfiguration):
                generate(4, 4, ((0, 0), "left"), ((0, 0), "top"))
            create.assert_not_called()

    def test_invalid_dimensions(self) -> None:
        with self.assertRaises(InvalidDimension):
            generate(0, 5, ((0, 0), "left"), ((0, 4), "bottom"))
        with self.assertRaises(InvalidConfiguration):
            generate(5, -2, ((0, 0), "left"), ((4, 0), "right"))

    def test_border_and_cell_size_limits(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            MazeGenerator(self._config(5, 5, border_width=0))
        with self.assertRaises(InvalidConfiguration):
            MazeGenerator(self._config(5, 5, border_width=6, cell_size=6))
        with self.assertRaises(InvalidConfiguration):
            MazeGenerator(self._config(5, 5, border_width=1, cell_size=3))
        MazeGenerator(self._config(5, 5, border_width=3, cell_size=4))

    def test_doors_must_face_outside(self) -> None:
        with self.assertRaises(InvalidConfiguration):
            generate(4, 4, ((0, 0), "right"), ((3, 3), "right"))
        with self.assertRaises(InvalidConfiguration):
            generate(4, 4, ((0, 0), "left"), ((4, 3), "right"))

    def test_seeded_generation_is_reproducible(self) -> None:
        config = self._config(15, 15)
        first = MazeGenerator(config, seed=42).generate()
        second = MazeGenerator(config, seed=42).generate()
        self.assertTrue((first.walls_array() == second.walls_array()).all())

    def test_unseeded_generation_varies(self) -> None:
        config = self._config(10, 10)
        layouts = {MazeGenerator(config).generate().walls_array().tobytes() for _ in range(5)}
        self.assertGreater(len(layouts), 1)

    def test_carving_leaves_play_history_untouched(self) -> None:
        grid = MazeGenerator(self._config(8, 8), seed=1).generate()
        self.assertFalse(grid.visited_array().any())

    def test_large_maze_does_not_overflow_the_stack(self) -> None:
        grid = MazeGenerator(self._config(200, 200), seed=7).generate()
        self.assertEqual(grid.internal_openings(), 200 * 200 - 1)


if __name__ == "__main__":
    unittest.main()
