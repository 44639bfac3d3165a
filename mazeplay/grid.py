"""Cell and wall model shared by the generator, solver and navigator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .errors import InvalidDimension

Coord = Tuple[int, int]


class Side(IntEnum):
    """Cell sides, numbered in wall-array order."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    @property
    def opposite(self) -> "Side":
        return Side((self + 2) % 4)

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]

    def step(self, coord: Coord) -> Coord:
        dx, dy = _DELTAS[self]
        return coord[0] + dx, coord[1] + dy

    @classmethod
    def parse(cls, value: object) -> "Side":
        """Accept a side name (``"left"``), its initial (``"l"``) or its index."""

        if isinstance(value, Side):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip().lower()
        if text.isdigit():
            return cls(int(text))
        for side in cls:
            if text in (side.name.lower(), side.name[0].lower()):
                return side
        raise ValueError(f"Unknown side: {value!r}")


_DELTAS = {
    Side.TOP: (0, -1),
    Side.RIGHT: (1, 0),
    Side.BOTTOM: (0, 1),
    Side.LEFT: (-1, 0),
}


@dataclass
class Cell:
    walls: List[bool] = field(default_factory=lambda: [True, True, True, True])
    visited: bool = False

    def has_wall(self, side: Side) -> bool:
        return self.walls[side]

    @property
    def openings(self) -> int:
        return sum(1 for wall in self.walls if not wall)


class Grid:
    """Fixed-size rectangle of cells indexed as ``grid[x, y]``.

    Walls between neighbours are only ever removed in pairs, so the wall on
    one side of a shared edge always matches the wall on the other side.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise InvalidDimension(
                f"width and height must be positive, got {width}x{height}"
            )
        self.width = int(width)
        self.height = int(height)
        self._cells = [[Cell() for _ in range(self.height)] for _ in range(self.width)]

    @classmethod
    def create(cls, width: int, height: int) -> "Grid":
        return cls(width, height)

    def __getitem__(self, coord: Coord) -> Cell:
        x, y = coord
        if not self.in_bounds(coord):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return self._cells[x][y]

    def __iter__(self) -> Iterator[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        return self[x, y]

    def neighbors_of(self, x: int, y: int) -> List[Tuple[Side, Coord]]:
        """In-bounds neighbours in top, right, bottom, left order."""

        neighbors: List[Tuple[Side, Coord]] = []
        for side in Side:
            target = side.step((x, y))
            if self.in_bounds(target):
                neighbors.append((side, target))
        return neighbors

    def side_between(self, a: Coord, b: Coord) -> Optional[Side]:
        dx, dy = b[0] - a[0], b[1] - a[1]
        for side, delta in _DELTAS.items():
            if delta == (dx, dy):
                return side
        return None

    def remove_wall_between(self, a: Coord, b: Coord) -> None:
        side = self.side_between(a, b)
        if side is None or not (self.in_bounds(a) and self.in_bounds(b)):
            return
        self[a].walls[side] = False
        self[b].walls[side.opposite] = False

    def passable(self, coord: Coord, side: Side) -> bool:
        return not self[coord].walls[side]

    def faces_outside(self, coord: Coord, side: Side) -> bool:
        return self.in_bounds(coord) and not self.in_bounds(side.step(coord))

    def open_door(self, coord: Coord, side: Side) -> None:
        if not self.faces_outside(coord, side):
            raise ValueError(f"Side {side.name} of {coord} is not on the outer boundary")
        self[coord].walls[side] = False

    def openings_count(self, x: int, y: int) -> int:
        return self[x, y].openings

    def reset_visited(self) -> None:
        for column in self._cells:
            for cell in column:
                cell.visited = False

    def internal_openings(self) -> int:
        """Number of removed walls shared by two in-bounds cells."""

        count = 0
        for x, y in self:
            cell = self._cells[x][y]
            if x + 1 < self.width and not cell.walls[Side.RIGHT]:
                count += 1
            if y + 1 < self.height and not cell.walls[Side.BOTTOM]:
                count += 1
        return count

    def boundary_openings(self) -> List[Tuple[Coord, Side]]:
        openings: List[Tuple[Coord, Side]] = []
        for coord in self:
            for side in Side:
                if self.faces_outside(coord, side) and self.passable(coord, side):
                    openings.append((coord, side))
        return openings

    def walls_array(self) -> np.ndarray:
        """Wall flags as a ``(height, width, 4)`` boolean array, row-major."""

        arr = np.ones((self.height, self.width, 4), dtype=bool)
        for x, y in self:
            arr[y, x] = self._cells[x][y].walls
        return arr

    def visited_array(self) -> np.ndarray:
        arr = np.zeros((self.height, self.width), dtype=bool)
        for x, y in self:
            arr[y, x] = self._cells[x][y].visited
        return arr


__all__ = ["Cell", "Coord", "Grid", "Side"]
