"""Exception types raised by maze generation, solving and navigation."""

from __future__ import annotations


class MazeError(Exception):
    """Base class for every error raised by :mod:`mazeplay`."""


class InvalidConfiguration(MazeError, ValueError):
    """The requested maze parameters cannot produce a valid maze."""


class InvalidDimension(InvalidConfiguration):
    """Width or height is not a positive number of cells."""


class IllegalMove(MazeError):
    """A directional move was refused by the navigator."""


class IllegalJump(MazeError):
    """A jump was refused by the navigator."""


class InternalConsistencyError(MazeError, RuntimeError):
    """A generated grid broke one of its own invariants."""


__all__ = [
    "MazeError",
    "InvalidConfiguration",
    "InvalidDimension",
    "IllegalMove",
    "IllegalJump",
    "InternalConsistencyError",
]
