"""Abstract interfaces for grid puzzle generation and evaluation."""

from __future__ import annotations

import json
import logging
import operator
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar, Union

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")

logger = logging.getLogger(__name__)


class InvalidDimension(ValueError):
    """Raised when a grid is requested with a non-positive row or column count."""


class InvalidLevelConfig(ValueError):
    """Raised when a level definition breaks its waypoint invariants."""


def validate_dimensions(rows: int, cols: int) -> Tuple[int, int]:
    """Check both sizes are positive integers and return them as plain ints."""

    checked = []
    for name, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool):
            raise InvalidDimension(f"{name} must be an integer, got {value!r}")
        try:
            size = operator.index(value)
        except TypeError:
            raise InvalidDimension(f"{name} must be an integer, got {value!r}") from None
        if size < 1:
            raise InvalidDimension(f"{name} must be at least 1, got {size}")
        checked.append(size)
    return checked[0], checked[1]


class AbstractPuzzleGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit puzzle records."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_puzzle(self, *args, **kwargs) -> RecordT:
        """Create a puzzle from the provided resources."""

    @abstractmethod
    def create_random_puzzle(self) -> RecordT:
        """Create a single randomized puzzle instance."""

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        """Generate a batch of puzzles and optionally persist metadata."""

        records = [self.create_random_puzzle() for _ in range(count)]
        logger.info("Generated %d %s records", len(records), type(self).__name__)
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Serialize puzzle records to JSON, appending if requested."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
        payload = [self.record_to_dict(record) for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")
        logger.debug("Wrote %d records to %s", len(existing) + len(payload), path)

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        """Dictionary serialization hook for puzzle records."""

        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Puzzle record must implement to_dict() or override record_to_dict() in the generator."
        )


class AbstractPuzzleEvaluator(ABC):
    """Base class scaffolding for puzzle evaluators."""

    def __init__(self, metadata_path: PathLike) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self._records = self._load_metadata()

    @property
    def records(self) -> Dict[str, Dict[str, Any]]:
        """Return the loaded metadata keyed by puzzle id."""

        return self._records

    def _read_metadata(self) -> List[Dict[str, Any]]:
        raw = json.loads(self.metadata_path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError("Puzzle metadata must be a list of records")
        return raw

    def _load_metadata(self) -> Dict[str, Dict[str, Any]]:
        records: Dict[str, Dict[str, Any]] = {}
        for record in self._read_metadata():
            puzzle_id = record.get("id")
            if not puzzle_id:
                raise ValueError("Each puzzle record must include an 'id'")
            records[str(puzzle_id)] = record
        return records

    def get_record(self, puzzle_id: str) -> Dict[str, Any]:
        try:
            return self._records[puzzle_id]
        except KeyError as exc:
            raise KeyError(f"Puzzle id '{puzzle_id}' not found in metadata") from exc

    @abstractmethod
    def evaluate(self, puzzle_id: str, *args, **kwargs):
        """Evaluate a candidate solution for the given puzzle."""


__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "InvalidDimension",
    "InvalidLevelConfig",
    "PathLike",
    "validate_dimensions",
]
