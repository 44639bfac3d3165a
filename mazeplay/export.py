"""Export printable puzzle and answer images for generated mazes."""

from __future__ import annotations

import argparse
import json
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from .config import MazeConfig, add_config_arguments, config_from_args
from .errors import InvalidConfiguration
from .generator import MazeGenerator
from .render import MazeRenderer
from .solver import MazeSolver

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class MazeRecord:
    id: str
    grid_size: Tuple[int, int]
    cell_size: int
    border_width: int
    entrance: dict
    exit: dict
    walls: List[List[List[bool]]]
    solution: List[Tuple[int, int]]
    steps: int
    cell_bboxes: List[List[Tuple[int, int, int, int]]]
    canvas_dimensions: Tuple[int, int]
    puzzle_image_path: str
    solution_image_path: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "grid_size": list(self.grid_size),
            "cell_size": self.cell_size,
            "border_width": self.border_width,
            "entrance": self.entrance,
            "exit": self.exit,
            "walls": self.walls,
            "solution": [list(coord) for coord in self.solution],
            "steps": self.steps,
            "cell_bboxes": [
                [list(map(int, bbox)) for bbox in row] for row in self.cell_bboxes
            ],
            "canvas_dimensions": list(self.canvas_dimensions),
            "puzzle_image_path": self.puzzle_image_path,
            "solution_image_path": self.solution_image_path,
        }


class MazeExporter:
    """Save a printable puzzle and its answer sheet for each generated maze.

    Assets land in ``output_dir/puzzles`` and ``output_dir/solutions``;
    record paths are stored relative to ``output_dir``.
    """

    def __init__(
        self,
        config: MazeConfig,
        output_dir: PathLike = "data/maze",
        *,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config
        self._generator = MazeGenerator(
            config, rng=random.Random(seed if seed is not None else config.seed)
        )
        self._solver = MazeSolver.from_config(config)
        self.renderer = MazeRenderer(config)

        self.output_dir = Path(output_dir)
        self.puzzle_dir = self.output_dir / "puzzles"
        self.solution_dir = self.output_dir / "solutions"
        for directory in (self.puzzle_dir, self.solution_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def create_maze(self, *, maze_id: Optional[str] = None) -> MazeRecord:
        maze_uuid = maze_id or str(uuid.uuid4())
        grid = self._generator.generate()
        solution = self._solver.solve(grid)

        puzzle_path = self.puzzle_dir / f"{maze_uuid}_puzzle.png"
        solution_path = self.solution_dir / f"{maze_uuid}_solution.png"
        self.renderer.render_puzzle(grid).save(puzzle_path)
        self.renderer.render_answer(grid, solution.path).save(solution_path)
        logger.debug("Saved maze %s to %s", maze_uuid, self.output_dir)

        return MazeRecord(
            id=maze_uuid,
            grid_size=(grid.width, grid.height),
            cell_size=self.config.cell_size,
            border_width=self.config.border_width,
            entrance=self.config.entrance.to_dict(),
            exit=self.config.exit.to_dict(),
            walls=grid.walls_array().tolist(),
            solution=solution.from_entrance(),
            steps=solution.steps,
            cell_bboxes=self.renderer.cell_bboxes(grid),
            canvas_dimensions=self.renderer.canvas_size(grid),
            puzzle_image_path=puzzle_path.relative_to(self.output_dir).as_posix(),
            solution_image_path=solution_path.relative_to(self.output_dir).as_posix(),
        )

    def generate_batch(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
        progress: bool = False,
    ) -> List[MazeRecord]:
        records = [
            self.create_maze()
            for _ in tqdm(range(count), desc="Mazes", disable=not progress)
        ]
        if metadata_path is not None:
            write_metadata(records, metadata_path, append=append)
        return records


def write_metadata(
    records: Iterable[MazeRecord],
    metadata_path: PathLike,
    *,
    append: bool = True,
) -> None:
    """Write records as a JSON list, after any records already in the file when appending."""

    path = Path(metadata_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    existing: List[dict] = []
    if append and path.exists():
        existing = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(existing, list):
            raise ValueError(f"Maze metadata in {path} must be a list of records")
    known = {entry.get("id") for entry in existing}
    added = [record.to_dict() for record in records if record.id not in known]
    path.write_text(json.dumps(existing + added, indent=2), encoding="utf-8")
    logger.info("Wrote %d maze records to %s", len(existing) + len(added), path)


__all__ = ["MazeExporter", "MazeRecord", "write_metadata"]


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export printable mazes and their answers")
    parser.add_argument("count", type=int, help="Number of mazes to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save assets")
    add_config_arguments(parser)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    try:
        args.config = config_from_args(args)
    except InvalidConfiguration as exc:
        parser.error(str(exc))
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    exporter = MazeExporter(args.config, output_dir=args.output_dir)
    metadata_path = exporter.output_dir / "mazes.json"
    logging.info(f"Generating {args.count} mazes of {args.width}x{args.height} cells...")
    records = exporter.generate_batch(args.count, metadata_path=metadata_path, progress=True)
    summary = [{"id": record.id, "steps": record.steps} for record in records]
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
