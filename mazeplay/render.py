"""Image and text renderers for mazes, answers and games in progress."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Dict, Iterable, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from .config import MazeConfig
from .grid import Coord, Grid, Side
from .navigator import DECISION_OPENINGS, Navigator

Color = Tuple[int, int, int]

WALL_COLOR = (0, 0, 0)
FLOOR_COLOR = (255, 255, 255)
VISITED_COLOR = (0xC9, 0xD4, 0xE8)
SPLIT_OFF_COLOR = (0x75, 0x9D, 0xE8)
ANSWER_SHEET_COLOR = (255, 0, 0)
REPLAY_COLOR = (0, 255, 0)
PLAYER_COLOR = (255, 0, 0)
REPLAY_DOT_COLOR = (0, 0, 0)
DOT_SIZE = 0.8


@dataclass
class DisplayOptions:
    """Visual aids toggled during play. They never affect the game itself."""

    show_path: bool = False
    show_splits: bool = False
    show_stats: bool = False
    show_answer: bool = False

    def toggle(self, name: str) -> bool:
        attribute = f"show_{name}"
        if not hasattr(self, attribute):
            raise ValueError(f"Unknown display option: {name!r}")
        value = not getattr(self, attribute)
        setattr(self, attribute, value)
        return value


class MazeRenderer:
    """Draw a grid with Pillow.

    Cells are ``cell_size`` pixels across and separated by ``border_width``
    pixel walls; the outer boundary is drawn twice as thick.
    """

    def __init__(self, config: MazeConfig) -> None:
        self.cell_size = config.cell_size
        self.border_width = config.border_width
        self.outer = 2 * config.border_width

    def canvas_size(self, grid: Grid) -> Tuple[int, int]:
        pitch = self.cell_size + self.border_width
        width = 2 * self.outer + grid.width * pitch - self.border_width
        height = 2 * self.outer + grid.height * pitch - self.border_width
        return width, height

    def cell_bbox(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Interior box of a cell as ``(left, top, right, bottom)``, right/bottom exclusive."""

        pitch = self.cell_size + self.border_width
        left = self.outer + x * pitch
        top = self.outer + y * pitch
        return left, top, left + self.cell_size, top + self.cell_size

    def cell_bboxes(self, grid: Grid) -> List[List[Tuple[int, int, int, int]]]:
        return [[self.cell_bbox(x, y) for x in range(grid.width)] for y in range(grid.height)]

    # ------------------------------------------------------------------

    def render_puzzle(self, grid: Grid) -> Image.Image:
        return self._render(grid, {})

    def render_answer(self, grid: Grid, path: Iterable[Coord]) -> Image.Image:
        return self._render(grid, {tuple(coord): ANSWER_SHEET_COLOR for coord in path})

    def render_play(
        self,
        navigator: Navigator,
        options: Optional[DisplayOptions] = None,
        *,
        replayed: Sequence[Coord] = (),
    ) -> Image.Image:
        """Snapshot of a game: highlights, player dot and any replayed answer cells."""

        options = options or DisplayOptions()
        grid = navigator.grid
        fills: Dict[Coord, Color] = {}
        for coord in navigator.visited_cells():
            if options.show_splits and navigator.is_decision_cell(*coord):
                fills[coord] = SPLIT_OFF_COLOR
            elif options.show_path:
                fills[coord] = VISITED_COLOR
        if options.show_answer:
            for coord in navigator.solution.path:
                fills[coord] = REPLAY_COLOR
        for coord in replayed[:-1]:
            fills[tuple(coord)] = REPLAY_COLOR

        canvas = self._render(grid, fills)
        draw = ImageDraw.Draw(canvas)
        if navigator.position is not None:
            self._draw_dot(draw, navigator.position, PLAYER_COLOR)
        if replayed:
            self._draw_dot(draw, tuple(replayed[-1]), REPLAY_DOT_COLOR)
        return canvas

    # ------------------------------------------------------------------

    def _render(self, grid: Grid, fills: Dict[Coord, Color]) -> Image.Image:
        width, height = self.canvas_size(grid)
        canvas = Image.new("RGB", (width, height), WALL_COLOR)
        draw = ImageDraw.Draw(canvas)

        for x, y in grid:
            fill = fills.get((x, y), FLOOR_COLOR)
            left, top, right, bottom = self.cell_bbox(x, y)
            draw.rectangle((left, top, right - 1, bottom - 1), fill=fill)
            cell = grid[x, y]
            for side in Side:
                if cell.walls[side]:
                    continue
                gap_fill = fill
                neighbor = side.step((x, y))
                if grid.in_bounds(neighbor) and fills.get(neighbor, FLOOR_COLOR) != fill:
                    gap_fill = FLOOR_COLOR
                draw.rectangle(self._gap_box(grid, (x, y), side), fill=gap_fill)
        return canvas

    def _gap_box(self, grid: Grid, coord: Coord, side: Side) -> Tuple[int, int, int, int]:
        """Inclusive box covering the wall on ``side`` of ``coord``."""

        left, top, right, bottom = self.cell_bbox(*coord)
        width, height = self.canvas_size(grid)
        if side is Side.TOP:
            edge = 0 if coord[1] == 0 else top - self.border_width
            return left, edge, right - 1, top - 1
        if side is Side.BOTTOM:
            edge = height if coord[1] == grid.height - 1 else bottom + self.border_width
            return left, bottom, right - 1, edge - 1
        if side is Side.LEFT:
            edge = 0 if coord[0] == 0 else left - self.border_width
            return edge, top, left - 1, bottom - 1
        edge = width if coord[0] == grid.width - 1 else right + self.border_width
        return right, top, edge - 1, bottom - 1

    def _draw_dot(self, draw: ImageDraw.ImageDraw, coord: Coord, color: Color) -> None:
        left, top, right, bottom = self.cell_bbox(*coord)
        radius = self.cell_size * DOT_SIZE / 2
        cx = left + self.cell_size / 2
        cy = top + self.cell_size / 2
        draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=color)


def render_text(
    grid: Grid,
    *,
    player: Optional[Coord] = None,
    answer: Optional[Collection[Coord]] = None,
    show_path: bool = False,
    show_splits: bool = False,
) -> str:
    """ASCII drawing: ``@`` player, ``o`` answer, ``*`` split-off, ``.`` visited."""

    answer_cells = {tuple(coord) for coord in answer} if answer else set()
    lines: List[str] = []
    for y in range(grid.height):
        top = ["+"]
        middle = []
        for x in range(grid.width):
            cell = grid[x, y]
            top.append("   " if not cell.walls[Side.TOP] else "---")
            top.append("+")
            middle.append(" " if not cell.walls[Side.LEFT] else "|")
            middle.append(f" {_marker(grid, (x, y), player, answer_cells, show_path, show_splits)} ")
        last = grid[grid.width - 1, y]
        middle.append(" " if not last.walls[Side.RIGHT] else "|")
        lines.append("".join(top))
        lines.append("".join(middle))
    bottom = ["+"]
    for x in range(grid.width):
        bottom.append("   " if not grid[x, grid.height - 1].walls[Side.BOTTOM] else "---")
        bottom.append("+")
    lines.append("".join(bottom))
    return "\n".join(lines)


def _marker(
    grid: Grid,
    coord: Coord,
    player: Optional[Coord],
    answer_cells: Collection[Coord],
    show_path: bool,
    show_splits: bool,
) -> str:
    if player is not None and coord == tuple(player):
        return "@"
    if coord in answer_cells:
        return "o"
    cell = grid[coord]
    if cell.visited and show_splits and cell.openings >= DECISION_OPENINGS:
        return "*"
    if cell.visited and show_path:
        return "."
    return " "


__all__ = [
    "DisplayOptions",
    "MazeRenderer",
    "render_text",
]
