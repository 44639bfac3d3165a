"""Interactive navigation over a generated maze.

A :class:`Navigator` starts the player on the entrance cell and accepts two
kinds of input:

* ``move(direction)`` steps one cell through an open wall. Leaving through
  the entrance is refused; leaving through the exit finishes the session.
* ``jump_to(x, y)`` teleports back onto any cell the player already stood on.

Refused input never changes state. Every call returns a :class:`Transition`
describing what happened, and accepted transitions are also pushed to any
subscribed listener so a renderer can redraw the affected cells.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Union

from .config import MazeConfig
from .errors import IllegalJump, IllegalMove
from .grid import Coord, Grid, Side
from .playback import AnswerPlayback
from .solver import Solution

logger = logging.getLogger(__name__)

DECISION_OPENINGS = 3


class Direction(Enum):
    UP = Side.TOP
    RIGHT = Side.RIGHT
    DOWN = Side.BOTTOM
    LEFT = Side.LEFT

    @property
    def side(self) -> Side:
        return self.value

    @classmethod
    def from_key(cls, key: str) -> "Direction":
        """Map ``w``/``a``/``s``/``d`` or a direction word to a direction."""

        try:
            return _KEYS[key.strip().lower()]
        except KeyError as exc:
            raise ValueError(f"Not a movement key: {key!r}") from exc

    @classmethod
    def coerce(cls, value: Union["Direction", Side, str]) -> "Direction":
        if isinstance(value, Direction):
            return value
        if isinstance(value, Side):
            return cls(value)
        return cls.from_key(value)


_KEYS = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "left": Direction.LEFT,
    "down": Direction.DOWN,
    "right": Direction.RIGHT,
}


class State(Enum):
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass
class NavigationSession:
    """Mutable play state. ``position`` is ``None`` once the maze is finished."""

    position: Optional[Coord]
    moves: int = 0
    jumps: int = 0

    @property
    def finished(self) -> bool:
        return self.position is None


@dataclass(frozen=True)
class Transition:
    action: str
    accepted: bool
    previous: Optional[Coord]
    position: Optional[Coord]
    finished: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class NavigationStats:
    moves: int
    jumps: int
    minimum_moves: int
    finished: bool
    accuracy_percent: Optional[float]

    def to_dict(self) -> dict:
        return {
            "moves": self.moves,
            "jumps": self.jumps,
            "minimum_moves": self.minimum_moves,
            "finished": self.finished,
            "accuracy_percent": self.accuracy_percent,
        }


Listener = Callable[[Transition], None]


class Navigator:
    def __init__(self, grid: Grid, solution: Solution, config: MazeConfig) -> None:
        self.grid = grid
        self.solution = solution
        self.config = config
        self.entrance = config.entrance
        self.exit = config.exit
        self._listeners: List[Listener] = []

        grid.reset_visited()
        self.session = NavigationSession(position=self.entrance.coord)
        grid[self.entrance.coord].visited = True

    # ------------------------------------------------------------------
    # state

    @property
    def state(self) -> State:
        return State.FINISHED if self.session.finished else State.PLAYING

    @property
    def position(self) -> Optional[Coord]:
        return self.session.position

    @property
    def move_count(self) -> int:
        return self.session.moves

    @property
    def jump_count(self) -> int:
        return self.session.jumps

    @property
    def accuracy_percent(self) -> Optional[float]:
        if not self.session.finished:
            return None
        if self.session.moves == 0:
            return math.inf
        return self.solution.steps / self.session.moves * 100

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # transitions

    def move(self, direction: Union[Direction, Side, str]) -> Transition:
        direction = Direction.coerce(direction)
        previous = self.session.position
        try:
            target = self._check_move(direction)
        except IllegalMove as exc:
            return Transition("move", False, previous, previous, self.session.finished, str(exc))

        if target is None:
            self.session.position = None
            logger.info(
                "Maze finished in %d moves and %d jumps (minimum %d)",
                self.session.moves,
                self.session.jumps,
                self.solution.steps,
            )
        else:
            self.session.position = target
            self.grid[target].visited = True
            self.session.moves += 1
        return self._emit(Transition("move", True, previous, self.session.position, self.session.finished))

    def jump_to(self, x: int, y: int) -> Transition:
        previous = self.session.position
        try:
            self._check_jump((x, y))
        except IllegalJump as exc:
            return Transition("jump", False, previous, previous, self.session.finished, str(exc))

        self.session.position = (x, y)
        self.grid[x, y].visited = True
        self.session.jumps += 1
        return self._emit(Transition("jump", True, previous, (x, y), False))

    def _check_move(self, direction: Direction) -> Optional[Coord]:
        """Return the cell the move lands on, or ``None`` when it exits the maze."""

        if self.session.finished:
            raise IllegalMove("The maze is already finished")
        current = self.session.position
        side = direction.side
        if current == self.entrance.coord and side == self.entrance.side:
            raise IllegalMove("Cannot leave the maze through the entrance")
        if not self.grid.passable(current, side):
            raise IllegalMove(f"Wall on the {side.name.lower()} side of {current}")
        if current == self.exit.coord and side == self.exit.side:
            return None
        target = side.step(current)
        if not self.grid.in_bounds(target):
            raise IllegalMove(f"No cell beyond the {side.name.lower()} side of {current}")
        return target

    def _check_jump(self, target: Coord) -> None:
        if self.session.finished:
            raise IllegalJump("The maze is already finished")
        if not self.grid.in_bounds(target):
            raise IllegalJump(f"Cell {target} is outside the maze")
        if not self.grid[target].visited:
            raise IllegalJump(f"Cell {target} has not been visited yet")

    def _emit(self, transition: Transition) -> Transition:
        for listener in list(self._listeners):
            listener(transition)
        return transition

    # ------------------------------------------------------------------
    # queries

    def is_decision_cell(self, x: int, y: int) -> bool:
        return self.grid.openings_count(x, y) >= DECISION_OPENINGS

    def is_on_visited_path(self, x: int, y: int) -> bool:
        return self.grid[x, y].visited

    def visited_cells(self) -> List[Coord]:
        return [coord for coord in self.grid if self.grid[coord].visited]

    def split_offs(self) -> List[Coord]:
        """Visited cells where the player had a choice of direction."""

        return [coord for coord in self.visited_cells() if self.is_decision_cell(*coord)]

    def stats(self) -> NavigationStats:
        return NavigationStats(
            moves=self.session.moves,
            jumps=self.session.jumps,
            minimum_moves=self.solution.steps,
            finished=self.session.finished,
            accuracy_percent=self.accuracy_percent,
        )

    def playback(self) -> AnswerPlayback:
        return AnswerPlayback(self.solution, delay=self.config.playback_delay)


__all__ = [
    "DECISION_OPENINGS",
    "Direction",
    "NavigationSession",
    "NavigationStats",
    "Navigator",
    "State",
    "Transition",
]
