"""Zip path puzzle: levels, path rules, generation and evaluation."""

__all__ = [
    "ZIP_LEVELS",
    "ZipLevelConfig",
    "ZipPathValidator",
    "ZipMove",
    "ZipGenerator",
    "ZipPuzzleRecord",
    "ZipEvaluator",
    "ZipEvaluationResult",
    "are_adjacent",
    "cell_at",
    "cell_coords",
    "level_score",
]

from .level import ZIP_LEVELS, ZipLevelConfig, are_adjacent, cell_at, cell_coords, level_score
from .validator import ZipMove, ZipPathValidator
from .generator import ZipGenerator, ZipPuzzleRecord
from .evaluator import ZipEvaluator, ZipEvaluationResult
