"""Zip puzzle generator for catalogue and randomly laid out levels."""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..base import AbstractPuzzleGenerator, PathLike, validate_dimensions
from .level import ZIP_LEVELS, ZipLevelConfig, cell_at, get_level

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = "Connect 1 to {max_number} to fill the grid!"


@dataclass
class ZipPuzzleRecord:
    id: str
    prompt: str
    config: ZipLevelConfig
    solution: Optional[List[int]]

    def to_dict(self) -> dict:
        payload = {"id": self.id, "prompt": self.prompt}
        payload.update(self.config.to_dict())
        payload["solution"] = None if self.solution is None else list(self.solution)
        return payload


def serpentine_path(rows: int, cols: int, *, by_column: bool = False) -> List[int]:
    """Boustrophedon walk that visits every cell once."""

    path: List[int] = []
    if by_column:
        for c in range(cols):
            rows_order = range(rows) if c % 2 == 0 else range(rows - 1, -1, -1)
            path.extend(cell_at(r, c, cols) for r in rows_order)
    else:
        for r in range(rows):
            cols_order = range(cols) if r % 2 == 0 else range(cols - 1, -1, -1)
            path.extend(cell_at(r, c, cols) for c in cols_order)
    return path


class ZipGenerator(AbstractPuzzleGenerator[ZipPuzzleRecord]):
    """Emit Zip levels either from the built-in catalogue or as random solvable layouts.

    Random levels carry ``score_level`` as their level number, so solving one
    is worth ``score_level * 100`` points.
    """

    def __init__(
        self,
        output_dir: PathLike = "data/zip",
        *,
        rows: int = 5,
        cols: int = 5,
        min_waypoints: int = 3,
        max_waypoints: int = 6,
        score_level: int = 1,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(output_dir)
        rows, cols = validate_dimensions(rows, cols)
        if min_waypoints < 1 or max_waypoints < min_waypoints:
            raise ValueError("Waypoint bounds must satisfy 1 <= min_waypoints <= max_waypoints")
        self.rows = rows
        self.cols = cols
        self.min_waypoints = min_waypoints
        self.max_waypoints = max_waypoints
        self.score_level = score_level
        self._rng = random.Random(seed)

    def create_puzzle(
        self,
        *,
        level: Optional[int] = None,
        puzzle_id: Optional[str] = None,
    ) -> ZipPuzzleRecord:
        """Record for a catalogue level, or a fresh random level when ``level`` is None."""

        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        if level is not None:
            config = get_level(level)
            solution = None
        else:
            solution = self._random_solution_path()
            config = self._place_waypoints(solution)
        logger.debug("Zip %s: %dx%d with %d waypoints", puzzle_uuid, config.rows, config.cols, config.max_number)
        return ZipPuzzleRecord(
            id=puzzle_uuid,
            prompt=PROMPT_TEMPLATE.format(max_number=config.max_number),
            config=config,
            solution=solution,
        )

    def create_random_puzzle(self) -> ZipPuzzleRecord:
        return self.create_puzzle()

    def create_catalogue(self) -> List[ZipPuzzleRecord]:
        return [
            self.create_puzzle(level=config.level, puzzle_id=f"zip-level-{config.level}")
            for config in ZIP_LEVELS
        ]

    # ------------------------------------------------------------------

    def _random_solution_path(self) -> List[int]:
        rows, cols = self.rows, self.cols
        walk = serpentine_path(rows, cols, by_column=self._rng.random() < 0.5)
        flip_rows = self._rng.random() < 0.5
        flip_cols = self._rng.random() < 0.5
        path = []
        for index in walk:
            r, c = divmod(index, cols)
            if flip_rows:
                r = rows - 1 - r
            if flip_cols:
                c = cols - 1 - c
            path.append(cell_at(r, c, cols))
        if self._rng.random() < 0.5:
            path.reverse()
        return path

    def _place_waypoints(self, solution: List[int]) -> ZipLevelConfig:
        total = len(solution)
        upper = min(self.max_waypoints, total)
        lower = min(self.min_waypoints, upper)
        count = self._rng.randint(lower, upper)
        if count == 1:
            steps = [0]
        else:
            interior = self._rng.sample(range(1, total - 1), count - 2)
            steps = [0] + sorted(interior) + [total - 1]
        numbered = {solution[step]: number for number, step in enumerate(steps, start=1)}
        return ZipLevelConfig(
            rows=self.rows, cols=self.cols, numbered_cells=numbered, level=self.score_level
        )


__all__ = ["ZipGenerator", "ZipPuzzleRecord", "serpentine_path"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate Zip path puzzles")
    parser.add_argument("count", type=int, help="Number of random puzzles to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/zip"), help="Where to save metadata")
    parser.add_argument("--rows", type=int, default=5)
    parser.add_argument("--cols", type=int, default=5)
    parser.add_argument("--min-waypoints", type=int, default=3)
    parser.add_argument("--max-waypoints", type=int, default=6)
    parser.add_argument("--score-level", type=int, default=1, help="Level used to score random puzzles")
    parser.add_argument("--catalogue", action="store_true", help="Also write the built-in levels")
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)
    generator = ZipGenerator(
        output_dir=args.output_dir,
        rows=args.rows,
        cols=args.cols,
        min_waypoints=args.min_waypoints,
        max_waypoints=args.max_waypoints,
        score_level=args.score_level,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    if args.catalogue:
        generator.write_metadata(generator.create_catalogue(), metadata_path)
    generator.generate_dataset(args.count, metadata_path=metadata_path)


if __name__ == "__main__":
    main()
