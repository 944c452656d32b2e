"""Zip level definitions and flat-index coordinate helpers."""

from __future__ import annotations

import operator
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from ..base import InvalidLevelConfig, validate_dimensions

COMPLETION_POINTS = 100


def cell_at(row: int, col: int, cols: int) -> int:
    """Flat index of (row, col) in a grid ``cols`` wide."""

    return row * cols + col


def cell_coords(index: int, cols: int) -> Tuple[int, int]:
    """Inverse of :func:`cell_at`."""

    return divmod(index, cols)


def are_adjacent(first: int, second: int, cols: int) -> bool:
    """True when the two cells share an edge (never diagonally)."""

    r1, c1 = cell_coords(first, cols)
    r2, c2 = cell_coords(second, cols)
    return abs(r1 - r2) + abs(c1 - c2) == 1


def _as_int(value, message: str) -> int:
    if isinstance(value, bool):
        raise InvalidLevelConfig(message)
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidLevelConfig(message) from None


@dataclass(frozen=True)
class ZipLevelConfig:
    """Static Zip puzzle: a grid and the cells carrying waypoint numbers 1..N.

    ``numbered_cells`` accepts a mapping of flat index to number (or the same
    as pairs) and is stored as ``(index, number)`` pairs ordered by number, so
    configs hash, compare and copy like plain values. ``waypoints`` gives the
    read-only mapping view.
    """

    rows: int
    cols: int
    numbered_cells: Tuple[Tuple[int, int], ...] = ()
    level: int = 0

    def __post_init__(self) -> None:
        rows, cols = validate_dimensions(self.rows, self.cols)
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "cols", cols)
        raw = self.numbered_cells
        pairs = list(raw.items()) if isinstance(raw, Mapping) else list(raw)
        if not pairs:
            raise InvalidLevelConfig("A level needs at least the waypoint numbered 1")
        total = rows * cols
        numbered = {}
        for index, number in pairs:
            index = _as_int(index, f"Waypoint cell {index!r} must be an integer")
            number = _as_int(number, f"Waypoint number {number!r} must be an integer")
            if not 0 <= index < total:
                raise InvalidLevelConfig(f"Waypoint cell {index} is outside a {rows}x{cols} grid")
            if index in numbered:
                raise InvalidLevelConfig(f"Cell {index} carries more than one number")
            numbered[index] = number
        numbers = sorted(numbered.values())
        if numbers != list(range(1, len(numbers) + 1)):
            raise InvalidLevelConfig(
                f"Waypoint numbers must run 1..{len(numbers)} without gaps or repeats, got {numbers}"
            )
        ordered = tuple(sorted(numbered.items(), key=lambda item: item[1]))
        object.__setattr__(self, "numbered_cells", ordered)
        object.__setattr__(self, "_lookup", numbered)

    @classmethod
    def from_positions(
        cls,
        level: int,
        rows: int,
        cols: int,
        positions: Iterable[Tuple[int, int, int]],
    ) -> "ZipLevelConfig":
        """Build a level from ``(row, col, number)`` triples."""

        rows, cols = validate_dimensions(rows, cols)
        numbered = {}
        for row, col, number in positions:
            if not (0 <= row < rows and 0 <= col < cols):
                raise InvalidLevelConfig(f"Waypoint {number} at ({row}, {col}) is outside the grid")
            index = cell_at(row, col, cols)
            if index in numbered:
                raise InvalidLevelConfig(f"Cell ({row}, {col}) carries more than one number")
            numbered[index] = number
        return cls(rows=rows, cols=cols, numbered_cells=numbered, level=level)

    @property
    def waypoints(self) -> Mapping[int, int]:
        return MappingProxyType(self._lookup)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def max_number(self) -> int:
        return len(self.numbered_cells)

    @property
    def start_cell(self) -> int:
        return self.cell_for_number(1)

    def number_at(self, index: int) -> Optional[int]:
        return self._lookup.get(index)

    def cell_for_number(self, number: int) -> int:
        for index, value in self.numbered_cells:
            if value == number:
                return index
        raise KeyError(f"No cell carries waypoint {number}")

    def in_bounds(self, index: int) -> bool:
        return 0 <= index < self.total_cells

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "rows": self.rows,
            "cols": self.cols,
            "numbered_cells": [
                {"index": index, "number": number} for index, number in self.numbered_cells
            ],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "ZipLevelConfig":
        numbered = [(int(item["index"]), int(item["number"])) for item in payload["numbered_cells"]]
        return cls(
            rows=int(payload["rows"]),
            cols=int(payload["cols"]),
            numbered_cells=numbered,
            level=int(payload.get("level", 0)),
        )


def level_score(config: ZipLevelConfig) -> int:
    return config.level * COMPLETION_POINTS


ZIP_LEVELS: List[ZipLevelConfig] = [
    ZipLevelConfig.from_positions(1, 5, 5, [(0, 0, 1), (2, 2, 2), (4, 4, 3)]),
    ZipLevelConfig.from_positions(2, 5, 5, [(0, 0, 1), (0, 4, 2), (4, 0, 3), (4, 4, 4)]),
    ZipLevelConfig.from_positions(3, 5, 5, [(0, 0, 1), (1, 3, 2), (3, 1, 3), (4, 4, 4)]),
    ZipLevelConfig.from_positions(
        4, 5, 5, [(0, 0, 1), (0, 4, 2), (2, 2, 3), (4, 0, 4), (4, 4, 5)]
    ),
    ZipLevelConfig.from_positions(
        5, 5, 5, [(0, 0, 1), (1, 3, 2), (2, 1, 3), (3, 4, 4), (4, 2, 5)]
    ),
    ZipLevelConfig.from_positions(
        6, 5, 5, [(0, 0, 1), (0, 4, 2), (2, 2, 3), (3, 1, 4), (4, 3, 5), (4, 4, 6)]
    ),
    ZipLevelConfig.from_positions(
        7, 5, 5, [(0, 0, 1), (0, 4, 2), (2, 2, 3), (4, 0, 4), (4, 4, 5)]
    ),
    ZipLevelConfig.from_positions(
        8, 5, 5, [(0, 0, 1), (0, 2, 2), (1, 4, 3), (3, 3, 4), (4, 1, 5), (4, 4, 6)]
    ),
    ZipLevelConfig.from_positions(
        9, 5, 6, [(0, 0, 1), (0, 5, 2), (2, 3, 3), (4, 0, 4), (4, 5, 5)]
    ),
    ZipLevelConfig.from_positions(
        10, 6, 6, [(0, 0, 1), (0, 5, 2), (2, 3, 3), (3, 1, 4), (5, 2, 5), (5, 5, 6)]
    ),
]


def get_level(level: int) -> ZipLevelConfig:
    for config in ZIP_LEVELS:
        if config.level == level:
            return config
    raise KeyError(f"Unknown zip level: {level}")


__all__ = [
    "ZIP_LEVELS",
    "ZipLevelConfig",
    "are_adjacent",
    "cell_at",
    "cell_coords",
    "get_level",
    "level_score",
]
