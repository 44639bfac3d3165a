"""Paced replay of a maze solution."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterator, Sequence, Union

from .grid import Coord
from .solver import Solution

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.1


class AnswerPlayback:
    """Walk a solution from the entrance to the exit, one cell per tick.

    Iterating yields every cell immediately and may be repeated. ``ticks()``
    sleeps ``delay`` seconds between cells and stops early after ``cancel()``.
    """

    def __init__(
        self,
        solution: Union[Solution, Sequence[Coord]],
        *,
        delay: float = DEFAULT_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        path = solution.path if isinstance(solution, Solution) else solution
        self._path = tuple(tuple(coord) for coord in path)
        self.delay = delay
        self._sleep = sleep
        self._cancelled = False

    def __iter__(self) -> Iterator[Coord]:
        # Solutions are stored exit first, so the entrance is the last element.
        for index in range(len(self._path) - 1, -1, -1):
            yield self._path[index]

    def __len__(self) -> int:
        return len(self._path)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def ticks(self) -> Iterator[Coord]:
        """Start a replay; a ``cancel()`` from here on stops it, even before the first tick."""

        self._cancelled = False
        return self._run()

    def _run(self) -> Iterator[Coord]:
        for step, coord in enumerate(self):
            if self._cancelled:
                logger.debug("Playback cancelled after %d of %d cells", step, len(self._path))
                return
            if step:
                self._sleep(self.delay)
            yield coord

    def play(self, on_step: Callable[[Coord], None]) -> int:
        """Feed each tick to ``on_step``; returns how many cells were shown."""

        shown = 0
        for coord in self.ticks():
            on_step(coord)
            shown += 1
        return shown


__all__ = ["AnswerPlayback", "DEFAULT_DELAY"]
