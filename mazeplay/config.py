"""Immutable maze configuration and its command-line wiring."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from .errors import InvalidConfiguration, InvalidDimension
from .grid import Coord, Side

MIN_CELL_SIZE = 4

# Corner presets and the two boundary sides each corner may open, default first.
CORNER_SIDES: Dict[str, Tuple[Side, Side]] = {
    "tl": (Side.LEFT, Side.TOP),
    "tr": (Side.RIGHT, Side.TOP),
    "br": (Side.RIGHT, Side.BOTTOM),
    "bl": (Side.LEFT, Side.BOTTOM),
}


def corner_coord(corner: str, width: int, height: int) -> Coord:
    key = corner.lower()
    if key not in CORNER_SIDES:
        raise InvalidConfiguration(f"Unknown corner {corner!r}; expected one of {sorted(CORNER_SIDES)}")
    x = 0 if key[1] == "l" else width - 1
    y = 0 if key[0] == "t" else height - 1
    return x, y


@dataclass(frozen=True)
class Door:
    """A boundary cell together with the side that opens to the outside."""

    coord: Coord
    side: Side

    def __post_init__(self) -> None:
        object.__setattr__(self, "coord", (int(self.coord[0]), int(self.coord[1])))
        object.__setattr__(self, "side", Side.parse(self.side))

    @classmethod
    def at_corner(
        cls,
        corner: str,
        width: int,
        height: int,
        side: Optional[object] = None,
    ) -> "Door":
        coord = corner_coord(corner, width, height)
        allowed = CORNER_SIDES[corner.lower()]
        resolved = allowed[0] if side is None else Side.parse(side)
        if resolved not in allowed:
            names = ", ".join(s.name.lower() for s in allowed)
            raise InvalidConfiguration(f"Corner {corner!r} can only open its {names} wall")
        return cls(coord, resolved)

    def to_dict(self) -> dict:
        return {"coord": list(self.coord), "side": self.side.name.lower()}


@dataclass(frozen=True)
class MazeConfig:
    width: int = 40
    height: int = 40
    entrance: Optional[Door] = None
    exit: Optional[Door] = None
    cell_size: int = 20
    border_width: int = 1
    playback_delay: float = 0.1
    seed: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.entrance is None:
            object.__setattr__(self, "entrance", Door((0, 0), Side.LEFT))
        if self.exit is None:
            object.__setattr__(self, "exit", Door((self.width - 1, self.height - 1), Side.RIGHT))

    def with_changes(self, **changes: Any) -> "MazeConfig":
        return replace(self, **changes)

    def validate(self) -> None:
        """Raise :class:`InvalidConfiguration` describing the first problem found."""

        if self.entrance.coord == self.exit.coord:
            raise InvalidConfiguration("The same cell cannot be both the entrance and the exit")
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimension(
                f"width and height must be above zero, got {self.width}x{self.height}"
            )
        if self.border_width <= 0:
            raise InvalidConfiguration("border_width must be at least 1")
        if self.border_width >= self.cell_size:
            raise InvalidConfiguration("border_width must be smaller than cell_size")
        if self.cell_size < MIN_CELL_SIZE:
            raise InvalidConfiguration(f"cell_size must be at least {MIN_CELL_SIZE}")
        for label, door in (("entrance", self.entrance), ("exit", self.exit)):
            x, y = door.coord
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise InvalidConfiguration(f"{label} {door.coord} lies outside the maze")
            dx, dy = door.side.delta
            if 0 <= x + dx < self.width and 0 <= y + dy < self.height:
                raise InvalidConfiguration(
                    f"{label} wall {door.side.name.lower()} of {door.coord} is not on the outer boundary"
                )

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "entrance": self.entrance.to_dict(),
            "exit": self.exit.to_dict(),
            "cell_size": self.cell_size,
            "border_width": self.border_width,
        }


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=40, help="Cells across")
    parser.add_argument("--height", type=int, default=40, help="Cells down")
    parser.add_argument("--entrance", choices=sorted(CORNER_SIDES), default="tl")
    parser.add_argument("--entrance-wall", type=str, default=None, help="Side of the entrance cell left open")
    parser.add_argument("--exit", choices=sorted(CORNER_SIDES), default="br")
    parser.add_argument("--exit-wall", type=str, default=None, help="Side of the exit cell left open")
    parser.add_argument("--cell-size", type=int, default=20, help="Path width in pixels")
    parser.add_argument("--border-width", type=int, default=1, help="Wall thickness in pixels")
    parser.add_argument("--delay", type=float, default=0.1, help="Seconds between answer replay steps")
    parser.add_argument("--seed", type=int, default=None)


def config_from_args(args: argparse.Namespace) -> MazeConfig:
    try:
        entrance = Door.at_corner(args.entrance, args.width, args.height, args.entrance_wall)
        exit_door = Door.at_corner(args.exit, args.width, args.height, args.exit_wall)
    except ValueError as exc:
        raise InvalidConfiguration(str(exc)) from exc
    config = MazeConfig(
        width=args.width,
        height=args.height,
        entrance=entrance,
        exit=exit_door,
        cell_size=args.cell_size,
        border_width=args.border_width,
        playback_delay=args.delay,
        seed=args.seed,
    )
    config.validate()
    return config


__all__ = [
    "CORNER_SIDES",
    "Door",
    "MazeConfig",
    "MIN_CELL_SIZE",
    "add_config_arguments",
    "config_from_args",
    "corner_coord",
]
