import math
import unittest

from mazeplay.config import Door, MazeConfig
from mazeplay.generator import MazeGenerator
from mazeplay.grid import Grid, Side
from mazeplay.navigator import Direction, Navigator, State
from mazeplay.solver import MazeSolver, solve


def _two_cell_navigator() -> Navigator:
    config = MazeConfig(width=2, height=1)
    grid = MazeGenerator(config).generate()
    return Navigator(grid, MazeSolver.from_config(config).solve(grid), config)


def _corridor_navigator() -> Navigator:
    """Two rows; the bottom row is the solution and the top row holds dead ends."""

    config = MazeConfig(
        width=3,
        height=2,
        entrance=Door((0, 1), Side.LEFT),
        exit=Door((2, 1), Side.RIGHT),
    )
    grid = Grid.create(3, 2)
    grid.remove_wall_between((0, 1), (1, 1))
    grid.remove_wall_between((1, 1), (2, 1))
    grid.remove_wall_between((1, 1), (1, 0))
    grid.remove_wall_between((1, 0), (0, 0))
    grid.remove_wall_between((2, 1), (2, 0))
    grid.open_door((0, 1), Side.LEFT)
    grid.open_door((2, 1), Side.RIGHT)
    return Navigator(grid, solve(grid, config.entrance, config.exit), config)


class NavigatorTests(unittest.TestCase):
    def test_two_cell_walkthrough(self) -> None:
        navigator = _two_cell_navigator()
        self.assertEqual(navigator.position, (0, 0))
        self.assertEqual(navigator.state, State.PLAYING)

        step = navigator.move(Direction.RIGHT)
        self.assertTrue(step.accepted)
        self.assertEqual(navigator.position, (1, 0))
        self.assertEqual(navigator.move_count, 1)

        finish = navigator.move(Direction.RIGHT)
        self.assertTrue(finish.accepted)
        self.assertTrue(finish.finished)
        self.assertEqual(navigator.state, State.FINISHED)
        self.assertIsNone(navigator.position)
        self.assertEqual(navigator.move_count, 1)
        self.assertEqual(navigator.accuracy_percent, 100)

    def test_leaving_through_the_entrance_is_refused(self) -> None:
        navigator = _two_cell_navigator()
        transition = navigator.move("a")
        self.assertFalse(transition.accepted)
        self.assertIn("entrance", transition.reason)
        self.assertEqual(navigator.position, (0, 0))
        self.assertEqual(navigator.move_count, 0)

    def test_closed_wall_changes_nothing(self) -> None:
        navigator = _two_cell_navigator()
        for direction in (Direction.UP, Direction.DOWN):
            transition = navigator.move(direction)
            self.assertFalse(transition.accepted)
            self.assertEqual(transition.position, (0, 0))
        self.assertEqual(navigator.position, (0, 0))
        self.assertEqual((navigator.move_count, navigator.jump_count), (0, 0))

    def test_open_wall_moves_count_one_each(self) -> None:
        navigator = _corridor_navigator()
        for expected, direction in enumerate(("d", "w", "a", "d", "s", "d", "w"), start=1):
            transition = navigator.move(direction)
            self.assertTrue(transition.accepted, transition.reason)
            self.assertEqual(navigator.move_count, expected)
        self.assertEqual(navigator.position, (2, 0))

    def test_entering_the_exit_cell_from_elsewhere_does_not_finish(self) -> None:
        navigator = _corridor_navigator()
        navigator.move("d")
        navigator.move("d")
        self.assertEqual(navigator.position, (2, 1))
        navigator.move("w")
        self.assertEqual(navigator.state, State.PLAYING)
        navigator.move("s")
        navigator.move("d")
        self.assertEqual(navigator.state, State.FINISHED)
        self.assertEqual(navigator.stats().minimum_moves, 2)
        self.assertAlmostEqual(navigator.accuracy_percent, 2 / 4 * 100)

    def test_jumps_only_land_on_visited_cells(self) -> None:
        navigator = _corridor_navigator()
        rejected = navigator.jump_to(2, 0)
        self.assertFalse(rejected.accepted)
        self.assertEqual(navigator.position, (0, 1))
        self.assertEqual(navigator.jump_count, 0)

        navigator.move("d")
        navigator.move("w")
        accepted = navigator.jump_to(0, 1)
        self.assertTrue(accepted.accepted)
        self.assertEqual(navigator.position, (0, 1))
        self.assertEqual(navigator.jump_count, 1)
        self.assertEqual(navigator.move_count, 2)

        self.assertFalse(navigator.jump_to(5, 5).accepted)
        self.assertEqual(navigator.jump_count, 1)

    def test_finished_session_ignores_further_input(self) -> None:
        navigator = _two_cell_navigator()
        navigator.move("d")
        navigator.move("d")
        before = navigator.stats()

        self.assertFalse(navigator.move("a").accepted)
        self.assertFalse(navigator.jump_to(0, 0).accepted)
        self.assertFalse(navigator.move("d").accepted)
        self.assertEqual(navigator.stats(), before)
        self.assertIsNone(navigator.position)

    def test_listeners_hear_only_accepted_transitions(self) -> None:
        navigator = _two_cell_navigator()
        heard = []
        navigator.subscribe(heard.append)
        navigator.move("w")
        navigator.move("d")
        navigator.jump_to(0, 0)
        self.assertEqual([(t.action, t.previous, t.position) for t in heard], [
            ("move", (0, 0), (1, 0)),
            ("jump", (1, 0), (0, 0)),
        ])
        navigator.unsubscribe(heard.append)
        navigator.move("d")
        self.assertEqual(len(heard), 2)

    def test_visited_path_and_decision_cells(self) -> None:
        navigator = _corridor_navigator()
        self.assertTrue(navigator.is_on_visited_path(0, 1))
        self.assertFalse(navigator.is_on_visited_path(1, 1))

        # (1, 1) opens left, right and up; (1, 0) opens down and left.
        self.assertTrue(navigator.is_decision_cell(1, 1))
        self.assertFalse(navigator.is_decision_cell(1, 0))

        navigator.move("d")
        navigator.move("w")
        self.assertEqual(navigator.split_offs(), [(1, 1)])
        self.assertCountEqual(navigator.visited_cells(), [(0, 1), (1, 1), (1, 0)])

    def test_accuracy_is_undefined_until_finished_and_infinite_without_moves(self) -> None:
        navigator = _two_cell_navigator()
        self.assertIsNone(navigator.accuracy_percent)
        self.assertIsNone(navigator.stats().accuracy_percent)
        navigator.move("d")
        navigator.move("d")
        navigator.session.moves = 0
        self.assertEqual(navigator.accuracy_percent, math.inf)

    def test_following_the_solution_scores_full_accuracy(self) -> None:
        config = MazeConfig(width=12, height=10)
        grid = MazeGenerator(config, seed=4).generate()
        solution = MazeSolver.from_config(config).solve(grid)
        navigator = Navigator(grid, solution, config)

        route = solution.from_entrance()
        for current, following in zip(route, route[1:]):
            self.assertTrue(navigator.move(grid.side_between(current, following)).accepted)
        self.assertTrue(navigator.move(config.exit.side).finished)
        self.assertEqual(navigator.move_count, solution.steps)
        self.assertAlmostEqual(navigator.accuracy_percent, 100.0)

    def test_direction_keys(self) -> None:
        self.assertIs(Direction.from_key("W"), Direction.UP)
        self.assertIs(Direction.from_key("a"), Direction.LEFT)
        self.assertIs(Direction.from_key("down"), Direction.DOWN)
        self.assertIs(Direction.coerce(Side.RIGHT), Direction.RIGHT)
        with self.assertRaises(ValueError):
            Direction.from_key("x")


if __name__ == "__main__":
    unittest.main()
