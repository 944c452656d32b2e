"""Maze escape generation and evaluation package."""

__all__ = [
    "MazeCell",
    "MazeGrid",
    "generate_maze",
    "MazeGenerator",
    "MazeEvaluator",
    "MazePuzzleRecord",
    "MazeEvaluationResult",
    "MazeLevel",
    "MAZE_LEVELS",
    "escape_score",
    "maze_dimensions",
]

from .grid import MazeCell, MazeGrid, generate_maze
from .levels import MAZE_LEVELS, MazeLevel, escape_score, maze_dimensions
from .generator import MazeGenerator, MazePuzzleRecord
from .evaluator import MazeEvaluator, MazeEvaluationResult
