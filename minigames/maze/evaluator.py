"""Maze escape evaluator that replays swipe moves against the maze walls."""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..base import AbstractPuzzleEvaluator
from .grid import DIRECTIONS, MazeGrid
from .levels import escape_score, get_level


@dataclass
class MazeEvaluationResult:
    puzzle_id: str
    reached_goal: bool
    final_position: Tuple[int, int]
    move_count: int
    blocked_moves: int
    visited_cells: List[Tuple[int, int]]
    score: int
    message: str

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "reached_goal": self.reached_goal,
            "final_position": list(self.final_position),
            "move_count": self.move_count,
            "blocked_moves": self.blocked_moves,
            "visited_cells": [list(cell) for cell in self.visited_cells],
            "score": self.score,
            "message": self.message,
        }


class MazeEvaluator(AbstractPuzzleEvaluator):
    """Evaluate maze escapes by walking a move list from start towards the goal."""

    def evaluate(
        self,
        puzzle_id: str,
        moves: Sequence[str],
        *,
        time_remaining: int = 0,
    ) -> MazeEvaluationResult:
        record = self.get_record(puzzle_id)
        maze = MazeGrid.from_dict({"cells": record["cells"]})
        start = tuple(map(int, record["start"]))
        goal = tuple(map(int, record["goal"]))

        position = start
        visited: List[Tuple[int, int]] = [position]
        move_count = 0
        blocked = 0
        for direction in moves:
            if position == goal:
                break
            if direction not in DIRECTIONS:
                raise ValueError(f"Unknown direction in candidate moves: {direction!r}")
            target = maze.move(position, direction)
            if target is None:
                blocked += 1
                continue
            position = target
            move_count += 1
            visited.append(position)

        reached_goal = position == goal
        score = 0
        if reached_goal:
            score = escape_score(get_level(int(record["level"])), time_remaining, move_count)

        if not moves:
            message = "No moves provided."
        elif reached_goal:
            message = "Escaped the maze."
        elif blocked and move_count == 0:
            message = "Every move was blocked by a wall."
        else:
            message = "Moves do not reach the exit."

        return MazeEvaluationResult(
            puzzle_id=puzzle_id,
            reached_goal=reached_goal,
            final_position=position,
            move_count=move_count,
            blocked_moves=blocked,
            visited_cells=visited,
            score=score,
            message=message,
        )


__all__ = ["MazeEvaluator", "MazeEvaluationResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate maze escape attempts")
    parser.add_argument("metadata", type=Path, help="Path to maze puzzles metadata JSON")
    parser.add_argument("puzzle_id", type=str, help="Identifier of the puzzle to evaluate")
    parser.add_argument("moves", nargs="*", help="Swipe directions in order: up, down, left, right")
    parser.add_argument("--time-remaining", type=int, default=0)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    evaluator = MazeEvaluator(args.metadata)
    result = evaluator.evaluate(args.puzzle_id, args.moves, time_remaining=args.time_remaining)
    print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
