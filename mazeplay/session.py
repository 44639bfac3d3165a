"""One generate-solve-play cycle at a time."""

from __future__ import annotations

import logging
import random
from typing import Optional

from .config import MazeConfig
from .errors import MazeError
from .generator import MazeGenerator
from .grid import Grid
from .navigator import Navigator
from .playback import AnswerPlayback
from .solver import MazeSolver, Solution

logger = logging.getLogger(__name__)


class MazeSession:
    """Owns the current maze, its solution, the navigator and any replay.

    A failed :meth:`new_maze` leaves the previous maze in place.
    """

    def __init__(self, config: Optional[MazeConfig] = None, *, seed: Optional[int] = None) -> None:
        self.config = config if config is not None else MazeConfig()
        self.config.validate()
        self._rng = random.Random(seed if seed is not None else self.config.seed)
        self.grid: Optional[Grid] = None
        self.solution: Optional[Solution] = None
        self.navigator: Optional[Navigator] = None
        self.playback: Optional[AnswerPlayback] = None

    @property
    def ready(self) -> bool:
        return self.navigator is not None

    def new_maze(self, config: Optional[MazeConfig] = None) -> Navigator:
        config = config if config is not None else self.config
        grid = MazeGenerator(config, rng=self._rng).generate()
        solution = MazeSolver.from_config(config).solve(grid)
        navigator = Navigator(grid, solution, config)

        self.cancel_playback()
        self.config = config
        self.grid = grid
        self.solution = solution
        self.navigator = navigator
        logger.debug("New %dx%d maze, %d steps to solve", config.width, config.height, solution.steps)
        return navigator

    def play_answer(self) -> AnswerPlayback:
        if self.navigator is None:
            raise MazeError("No maze has been generated yet")
        self.cancel_playback()
        self.playback = self.navigator.playback()
        return self.playback

    def cancel_playback(self) -> None:
        if self.playback is not None:
            self.playback.cancel()
            self.playback = None


__all__ = ["MazeSession"]
