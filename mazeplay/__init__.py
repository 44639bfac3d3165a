"""Perfect maze generation, solving and interactive play."""

__all__ = [
    "AnswerPlayback",
    "Cell",
    "Direction",
    "DisplayOptions",
    "Door",
    "Grid",
    "IllegalJump",
    "IllegalMove",
    "InternalConsistencyError",
    "InvalidConfiguration",
    "InvalidDimension",
    "MazeConfig",
    "MazeError",
    "MazeExporter",
    "MazeGenerator",
    "MazeRecord",
    "MazeRenderer",
    "MazeSession",
    "MazeSolver",
    "NavigationSession",
    "NavigationStats",
    "Navigator",
    "Side",
    "Solution",
    "State",
    "Transition",
    "generate",
    "render_text",
    "solve",
    "write_metadata",
]

from .config import Door, MazeConfig
from .errors import (
    IllegalJump,
    IllegalMove,
    InternalConsistencyError,
    InvalidConfiguration,
    InvalidDimension,
    MazeError,
)
from .export import MazeExporter, MazeRecord, write_metadata
from .generator import MazeGenerator, generate
from .grid import Cell, Grid, Side
from .navigator import Direction, NavigationSession, NavigationStats, Navigator, State, Transition
from .playback import AnswerPlayback
from .render import DisplayOptions, MazeRenderer, render_text
from .session import MazeSession
from .solver import MazeSolver, Solution, solve
