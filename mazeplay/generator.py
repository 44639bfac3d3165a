"""Perfect maze generator using randomized depth-first carving."""

from __future__ import annotations

import argparse
import logging
import random
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .config import Door, MazeConfig, add_config_arguments, config_from_args
from .errors import InvalidConfiguration
from .grid import Coord, Grid, Side
from .render import render_text
from .solver import MazeSolver

logger = logging.getLogger(__name__)

DoorLike = Union[Door, Tuple[Coord, object]]


class MazeGenerator:
    """Carve a spanning tree over a grid, rooted at the configured exit cell."""

    def __init__(
        self,
        config: MazeConfig,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        config.validate()
        self.config = config
        if rng is None:
            rng = random.Random(seed if seed is not None else config.seed)
        self._rng = rng

    @property
    def rng(self) -> random.Random:
        return self._rng

    def generate(self) -> Grid:
        grid = Grid.create(self.config.width, self.config.height)
        self._carve(grid, self.config.exit.coord)
        self.install_doors(grid)
        logger.debug(
            "Generated %dx%d maze rooted at %s (%d passages)",
            grid.width,
            grid.height,
            self.config.exit.coord,
            grid.internal_openings(),
        )
        return grid

    def install_doors(self, grid: Grid) -> None:
        grid.open_door(self.config.entrance.coord, self.config.entrance.side)
        grid.open_door(self.config.exit.coord, self.config.exit.side)

    # ------------------------------------------------------------------

    def _carve(self, grid: Grid, root: Coord) -> None:
        carved = np.zeros((grid.height, grid.width), dtype=bool)
        carved[root[1], root[0]] = True
        stack: List[Tuple[Coord, Iterator[Coord]]] = [(root, self._shuffled_neighbors(grid, root))]

        # Each frame keeps its own neighbour iterator so the visiting order is
        # exactly that of the recursive backtracker.
        while stack:
            current, pending = stack[-1]
            for nx, ny in pending:
                if not carved[ny, nx]:
                    grid.remove_wall_between(current, (nx, ny))
                    carved[ny, nx] = True
                    stack.append(((nx, ny), self._shuffled_neighbors(grid, (nx, ny))))
                    break
            else:
                stack.pop()

    def _shuffled_neighbors(self, grid: Grid, coord: Coord) -> Iterator[Coord]:
        neighbors = [target for _, target in grid.neighbors_of(*coord)]
        self._rng.shuffle(neighbors)
        return iter(neighbors)


def _as_door(value: DoorLike) -> Door:
    if isinstance(value, Door):
        return value
    coord, side = value
    try:
        return Door(tuple(coord), Side.parse(side))
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(f"Invalid door: {value!r}") from exc


def generate(
    width: int,
    height: int,
    entrance: DoorLike,
    exit: DoorLike,
    *,
    seed: Optional[int] = None,
    cell_size: int = 20,
    border_width: int = 1,
) -> Grid:
    """Build, carve and open a ``width`` x ``height`` maze in one call."""

    config = MazeConfig(
        width=width,
        height=height,
        entrance=_as_door(entrance),
        exit=_as_door(exit),
        cell_size=cell_size,
        border_width=border_width,
    )
    return MazeGenerator(config, seed=seed).generate()


__all__ = ["MazeGenerator", "generate"]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a perfect maze and print it as text")
    add_config_arguments(parser)
    parser.add_argument("--answer", action="store_true", help="Mark the solution path")
    args = parser.parse_args(argv)
    try:
        args.config = config_from_args(args)
    except InvalidConfiguration as exc:
        parser.error(str(exc))
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    config = args.config
    grid = MazeGenerator(config).generate()
    solution = MazeSolver.from_config(config).solve(grid)
    print(render_text(grid, answer=solution.path if args.answer else None))
    print(f"Minimum moves: {solution.steps}")


if __name__ == "__main__":
    main()
