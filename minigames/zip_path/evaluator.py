"""Zip puzzle evaluator that replays a stream of touched cells."""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..base import AbstractPuzzleEvaluator
from .level import ZipLevelConfig, level_score
from .validator import BACKTRACKED, ZipPathValidator


@dataclass
class ZipEvaluationResult:
    puzzle_id: str
    path: List[int]
    cells_covered: int
    total_cells: int
    highest_number: int
    max_number: int
    rejected_cells: List[int]
    backtracks: int
    solved: bool
    score: int
    message: str

    @property
    def coverage(self) -> float:
        return self.cells_covered / self.total_cells if self.total_cells else 0.0

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "path": list(self.path),
            "cells_covered": self.cells_covered,
            "total_cells": self.total_cells,
            "coverage": self.coverage,
            "highest_number": self.highest_number,
            "max_number": self.max_number,
            "rejected_cells": list(self.rejected_cells),
            "backtracks": self.backtracks,
            "solved": self.solved,
            "score": self.score,
            "message": self.message,
        }


class ZipEvaluator(AbstractPuzzleEvaluator):
    """Evaluate Zip attempts by feeding each touched cell through the path rules."""

    def evaluate(self, puzzle_id: str, cells: Sequence[int]) -> ZipEvaluationResult:
        record = self.get_record(puzzle_id)
        config = ZipLevelConfig.from_dict(record)
        validator = ZipPathValidator(config)

        path: List[int] = []
        rejected: List[int] = []
        backtracks = 0
        solved = False
        for cell in cells:
            move = validator.add_to_path(path, int(cell))
            if not move.accepted:
                rejected.append(int(cell))
            elif move.outcome == BACKTRACKED:
                backtracks += 1
            path = move.path
            if move.won:
                solved = True
                break

        highest = validator.next_required_number(path) - 1
        if not path:
            message = "Path never started on waypoint 1."
        elif solved:
            message = "Every cell filled with the waypoints in order."
        elif highest < config.max_number:
            message = f"Path stops before waypoint {highest + 1}."
        else:
            message = "All waypoints reached but some cells are still empty."

        return ZipEvaluationResult(
            puzzle_id=puzzle_id,
            path=path,
            cells_covered=len(path),
            total_cells=config.total_cells,
            highest_number=highest,
            max_number=config.max_number,
            rejected_cells=rejected,
            backtracks=backtracks,
            solved=solved,
            score=level_score(config) if solved else 0,
            message=message,
        )


__all__ = ["ZipEvaluator", "ZipEvaluationResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate Zip path attempts")
    parser.add_argument("metadata", type=Path, help="Path to zip puzzles metadata JSON")
    parser.add_argument("puzzle_id", type=str, help="Identifier of the puzzle to evaluate")
    parser.add_argument("cells", nargs="*", type=int, help="Flat cell indices in the order they were touched")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    evaluator = ZipEvaluator(args.metadata)
    result = evaluator.evaluate(args.puzzle_id, args.cells)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
