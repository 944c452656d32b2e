"""Maze escape puzzle generator built on the recursive backtracker."""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..base import AbstractPuzzleGenerator, PathLike, validate_dimensions
from .grid import MazeGrid, generate_maze
from .levels import get_level, maze_dimensions

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Swipe to move! Find the exit!"


@dataclass
class MazePuzzleRecord:
    id: str
    prompt: str
    level: int
    grid_size: Tuple[int, int]
    maze: MazeGrid
    start: Tuple[int, int]
    goal: Tuple[int, int]
    solution: List[Tuple[int, int]]
    time_limit: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "level": self.level,
            "grid_size": list(self.grid_size),
            "cells": self.maze.to_dict()["cells"],
            "maze_grid": self.maze.to_block_grid(),
            "start": list(self.start),
            "goal": list(self.goal),
            "solution": [list(cell) for cell in self.solution],
            "time_limit": self.time_limit,
        }


class MazeGenerator(AbstractPuzzleGenerator[MazePuzzleRecord]):
    """Generate perfect mazes with a start in the top-left and an exit in the bottom-right."""

    def __init__(
        self,
        output_dir: PathLike = "data/maze",
        *,
        level: int = 1,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        prompt: str = DEFAULT_PROMPT,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(output_dir)
        self.level = get_level(level)
        default_rows, default_cols = maze_dimensions(level - 1)
        self.rows = default_rows if rows is None else rows
        self.cols = default_cols if cols is None else cols
        self.rows, self.cols = validate_dimensions(self.rows, self.cols)
        self.prompt = prompt
        self._rng = random.Random(seed)

    def create_puzzle(self, *, puzzle_id: Optional[str] = None) -> MazePuzzleRecord:
        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        maze = generate_maze(self.rows, self.cols, rng=self._rng)
        start = (0, 0)
        goal = (self.rows - 1, self.cols - 1)
        solution = maze.solve(start, goal)
        if not solution:
            raise RuntimeError("Failed to generate maze path")
        logger.debug("Maze %s: %dx%d, solution length %d", puzzle_uuid, self.rows, self.cols, len(solution))

        return MazePuzzleRecord(
            id=puzzle_uuid,
            prompt=self.prompt,
            level=self.level.level,
            grid_size=(self.rows, self.cols),
            maze=maze,
            start=start,
            goal=goal,
            solution=solution,
            time_limit=self.level.time_limit,
        )

    def create_random_puzzle(self) -> MazePuzzleRecord:
        return self.create_puzzle()


__all__ = ["MazeGenerator", "MazePuzzleRecord"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate maze escape puzzles")
    parser.add_argument("count", type=int, help="Number of puzzles to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save metadata")
    parser.add_argument("--level", type=int, default=1, help="Level 1-5; sets size and time limit")
    parser.add_argument("--rows", type=int, default=None, help="Override the level's row count")
    parser.add_argument("--cols", type=int, default=None, help="Override the level's column count")
    parser.add_argument("--prompt", type=str, default=DEFAULT_PROMPT)
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)
    generator = MazeGenerator(
        output_dir=args.output_dir,
        level=args.level,
        rows=args.rows,
        cols=args.cols,
        prompt=args.prompt,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    generator.generate_dataset(args.count, metadata_path=metadata_path)


if __name__ == "__main__":
    main()
