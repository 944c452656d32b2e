"""Grid mini-game cores: maze carving and Zip path validation."""

__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "InvalidDimension",
    "InvalidLevelConfig",
    "MazeCell",
    "MazeGrid",
    "generate_maze",
    "MazeGenerator",
    "MazeEvaluator",
    "MazePuzzleRecord",
    "MazeEvaluationResult",
    "ZipLevelConfig",
    "ZipPathValidator",
    "ZipMove",
    "ZipGenerator",
    "ZipEvaluator",
    "ZipPuzzleRecord",
    "ZipEvaluationResult",
]

from .base import AbstractPuzzleGenerator, AbstractPuzzleEvaluator, InvalidDimension, InvalidLevelConfig
from .maze import (
    MazeCell,
    MazeGrid,
    generate_maze,
    MazeGenerator,
    MazeEvaluator,
    MazePuzzleRecord,
    MazeEvaluationResult,
)
from .zip_path import (
    ZipLevelConfig,
    ZipPathValidator,
    ZipMove,
    ZipGenerator,
    ZipEvaluator,
    ZipPuzzleRecord,
    ZipEvaluationResult,
)
