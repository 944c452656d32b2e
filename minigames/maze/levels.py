"""Level table and scoring for the maze escape game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

BASE_MAZE_SIZE = 10
FREE_MOVES = 15
MOVE_PENALTY = 2
MIN_SCORE = 10


@dataclass(frozen=True)
class MazeLevel:
    level: int
    time_limit: int  # seconds
    base_score: int
    time_bonus_multiplier: int


MAZE_LEVELS: List[MazeLevel] = [
    MazeLevel(level=1, time_limit=60, base_score=100, time_bonus_multiplier=2),
    MazeLevel(level=2, time_limit=75, base_score=150, time_bonus_multiplier=2),
    MazeLevel(level=3, time_limit=90, base_score=200, time_bonus_multiplier=3),
    MazeLevel(level=4, time_limit=100, base_score=300, time_bonus_multiplier=3),
    MazeLevel(level=5, time_limit=120, base_score=500, time_bonus_multiplier=4),
]


def get_level(level: int) -> MazeLevel:
    for entry in MAZE_LEVELS:
        if entry.level == level:
            return entry
    raise KeyError(f"Unknown maze level: {level}")


def maze_dimensions(level_index: int) -> Tuple[int, int]:
    """Square maze size for a zero-based level index; level 1 is 10x10."""

    if level_index < 0:
        raise ValueError("level_index must be non-negative")
    size = BASE_MAZE_SIZE + level_index
    return size, size


def escape_score(level: MazeLevel, time_remaining: int, move_count: int) -> int:
    time_bonus = max(0, time_remaining) * level.time_bonus_multiplier
    move_penalty = max(0, move_count - FREE_MOVES) * MOVE_PENALTY
    return max(level.base_score + time_bonus - move_penalty, MIN_SCORE)


__all__ = ["MAZE_LEVELS", "MazeLevel", "escape_score", "get_level", "maze_dimensions"]
