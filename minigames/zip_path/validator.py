"""Path legality and win detection for the Zip puzzle.

A Zip path is a list of flat cell indices drawn by the player. It must start
on waypoint 1, step only between edge-adjacent cells, never revisit a cell and
cross the numbered waypoints in increasing order. The puzzle is solved when
the path covers every cell and has passed every waypoint.

All methods take the current path and return new values; the caller owns the
path between interactions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .level import ZipLevelConfig, are_adjacent, cell_at, cell_coords

EXTENDED = "extended"
BACKTRACKED = "backtracked"
REJECTED = "rejected"
UNCHANGED = "unchanged"


@dataclass
class ZipMove:
    """Result of feeding one candidate cell to :meth:`ZipPathValidator.add_to_path`."""

    path: List[int]
    outcome: str
    won: bool = False

    @property
    def accepted(self) -> bool:
        return self.outcome != REJECTED


class ZipPathValidator:
    """Stateless rule checker bound to one level definition."""

    def __init__(self, config: ZipLevelConfig) -> None:
        self.config = config

    def next_required_number(self, path: Sequence[int]) -> int:
        highest = 0
        for index in path:
            number = self.config.number_at(index)
            if number is not None and number > highest:
                highest = number
        return highest + 1

    def can_extend(self, path: Sequence[int], candidate: int) -> bool:
        if not self.config.in_bounds(candidate):
            return False
        if not path:
            return candidate == self.config.start_cell
        # Cells already on the path are backtrack targets, not extensions.
        if candidate in path:
            return False
        if not are_adjacent(path[-1], candidate, self.config.cols):
            return False
        number = self.config.number_at(candidate)
        if number is not None and number != self.next_required_number(path):
            return False
        return True

    @staticmethod
    def backtrack(path: Sequence[int], candidate: int) -> List[int]:
        """Truncate ``path`` so it ends on ``candidate``; unchanged if absent or already last."""

        try:
            position = list(path).index(candidate)
        except ValueError:
            return list(path)
        return list(path[: position + 1])

    def is_connected_path(self, path: Sequence[int]) -> bool:
        """Distinct in-grid cells, each edge-adjacent to the one before it."""

        if len(set(path)) != len(path):
            return False
        if any(not self.config.in_bounds(index) for index in path):
            return False
        cols = self.config.cols
        return all(are_adjacent(a, b, cols) for a, b in zip(path, path[1:]))

    def check_win(self, path: Sequence[int]) -> bool:
        if len(path) != self.config.total_cells:
            return False
        if not self.is_connected_path(path):
            return False
        last_number = 0
        for index in path:
            number = self.config.number_at(index)
            if number is not None:
                if number != last_number + 1:
                    return False
                last_number = number
        return last_number == self.config.max_number

    def legal_extensions(self, path: Sequence[int]) -> List[int]:
        if not path:
            return [self.config.start_cell]
        row, col = cell_coords(path[-1], self.config.cols)
        candidates = []
        for dr, dc in ((-1, 0), (0, 1), (1, 0), (0, -1)):
            r, c = row + dr, col + dc
            if 0 <= r < self.config.rows and 0 <= c < self.config.cols:
                index = cell_at(r, c, self.config.cols)
                if self.can_extend(path, index):
                    candidates.append(index)
        return candidates

    def has_legal_moves(self, path: Sequence[int]) -> bool:
        """False when the path is stuck and only backtracking can continue it."""

        return bool(self.legal_extensions(path))

    def add_to_path(self, path: Sequence[int], candidate: int) -> ZipMove:
        """Apply one player interaction: backtrack onto a drawn cell or extend the path."""

        if candidate in path:
            if candidate == path[-1]:
                return ZipMove(path=list(path), outcome=UNCHANGED, won=self.check_win(path))
            return ZipMove(path=self.backtrack(path, candidate), outcome=BACKTRACKED)
        if not self.can_extend(path, candidate):
            return ZipMove(path=list(path), outcome=REJECTED, won=self.check_win(path))
        extended = list(path) + [candidate]
        return ZipMove(path=extended, outcome=EXTENDED, won=self.check_win(extended))


__all__ = [
    "BACKTRACKED",
    "EXTENDED",
    "REJECTED",
    "UNCHANGED",
    "ZipMove",
    "ZipPathValidator",
]
