"""Unique-path solver for generated perfect mazes."""

from __future__ import annotations

import logging
from typing import Iterator, List, NamedTuple, Tuple, Union

import numpy as np

from .config import Door, MazeConfig
from .errors import InternalConsistencyError, InvalidConfiguration
from .grid import Coord, Grid

logger = logging.getLogger(__name__)


class Solution(NamedTuple):
    """Solution path ordered from the exit back to the entrance."""

    path: Tuple[Coord, ...]
    steps: int

    @property
    def exit(self) -> Coord:
        return self.path[0]

    @property
    def entrance(self) -> Coord:
        return self.path[-1]

    def from_entrance(self) -> List[Coord]:
        return list(reversed(self.path))

    def includes(self, coord: Coord) -> bool:
        return tuple(coord) in self.path

    def to_dict(self) -> dict:
        return {"path": [list(coord) for coord in self.path], "steps": self.steps}


class MazeSolver:
    """Depth-first search from the entrance that follows open walls only.

    Neighbours are tried in the fixed order top, right, bottom, left. A
    perfect maze has exactly one route, so the first one found is the answer.
    """

    def __init__(self, entrance: Coord, exit: Coord) -> None:
        self.entrance: Coord = (int(entrance[0]), int(entrance[1]))
        self.exit: Coord = (int(exit[0]), int(exit[1]))
        if self.entrance == self.exit:
            raise InvalidConfiguration("The same cell cannot be both the entrance and the exit")

    @classmethod
    def from_config(cls, config: MazeConfig) -> "MazeSolver":
        return cls(config.entrance.coord, config.exit.coord)

    def solve(self, grid: Grid) -> Solution:
        for label, coord in (("entrance", self.entrance), ("exit", self.exit)):
            if not grid.in_bounds(coord):
                raise InvalidConfiguration(f"{label} {coord} lies outside the {grid.width}x{grid.height} grid")

        seen = np.zeros((grid.height, grid.width), dtype=bool)
        seen[self.entrance[1], self.entrance[0]] = True
        route: List[Coord] = [self.entrance]
        frames: List[Iterator[Coord]] = [self._passages(grid, self.entrance)]

        while route:
            for nx, ny in frames[-1]:
                if seen[ny, nx]:
                    continue
                if (nx, ny) == self.exit:
                    path = (self.exit,) + tuple(reversed(route))
                    logger.debug("Solved maze in %d steps", len(path) - 1)
                    return Solution(path=path, steps=len(path) - 1)
                seen[ny, nx] = True
                route.append((nx, ny))
                frames.append(self._passages(grid, (nx, ny)))
                break
            else:
                route.pop()
                frames.pop()

        raise InternalConsistencyError(
            f"No path from {self.entrance} to {self.exit}; the grid is not fully connected"
        )

    @staticmethod
    def _passages(grid: Grid, coord: Coord) -> Iterator[Coord]:
        for side, target in grid.neighbors_of(*coord):
            if grid.passable(coord, side):
                yield target


def solve(
    grid: Grid,
    entrance: Union[Door, Coord],
    exit: Union[Door, Coord],
) -> Solution:
    entrance_coord = entrance.coord if isinstance(entrance, Door) else tuple(entrance)
    exit_coord = exit.coord if isinstance(exit, Door) else tuple(exit)
    return MazeSolver(entrance_coord, exit_coord).solve(grid)


__all__ = ["MazeSolver", "Solution", "solve"]
