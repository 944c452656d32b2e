"""Wall-based maze grids carved with a randomized recursive backtracker."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ..base import validate_dimensions

WALL = 1
PATH = 0

Position = Tuple[int, int]

SIDES = ("top", "right", "bottom", "left")
OPPOSITE = {"top": "bottom", "right": "left", "bottom": "top", "left": "right"}

# direction -> (row delta, col delta, wall side crossed)
DIRECTIONS: Dict[str, Tuple[int, int, str]] = {
    "up": (-1, 0, "top"),
    "right": (0, 1, "right"),
    "down": (1, 0, "bottom"),
    "left": (0, -1, "left"),
}


@dataclass(frozen=True)
class MazeCell:
    """One grid position; a ``True`` side means the wall is standing."""

    row: int
    col: int
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True

    def has_wall(self, side: str) -> bool:
        if side not in SIDES:
            raise ValueError(f"Unknown wall side: {side!r}")
        return getattr(self, side)

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


class MazeGrid:
    """Immutable rows x cols arrangement of :class:`MazeCell`."""

    def __init__(self, cells: Sequence[Sequence[MazeCell]]) -> None:
        self._cells: Tuple[Tuple[MazeCell, ...], ...] = tuple(tuple(row) for row in cells)
        if not self._cells or not self._cells[0]:
            raise ValueError("A maze grid needs at least one cell")
        width = len(self._cells[0])
        if any(len(row) != width for row in self._cells):
            raise ValueError("Maze rows must all have the same length")
        self._check_walls()

    def _check_walls(self) -> None:
        """Every cell sits at its own coordinates and neighbours agree on shared walls."""

        for r, row in enumerate(self._cells):
            for c, cell in enumerate(row):
                if (cell.row, cell.col) != (r, c):
                    raise ValueError(f"Cell at ({r}, {c}) claims to be ({cell.row}, {cell.col})")
                if c + 1 < len(row) and cell.right != row[c + 1].left:
                    raise ValueError(f"Wall between ({r}, {c}) and ({r}, {c + 1}) is one-sided")
                if r + 1 < len(self._cells) and cell.bottom != self._cells[r + 1][c].top:
                    raise ValueError(f"Wall between ({r}, {c}) and ({r + 1}, {c}) is one-sided")

    @property
    def rows(self) -> int:
        return len(self._cells)

    @property
    def cols(self) -> int:
        return len(self._cells[0])

    def cell(self, row: int, col: int) -> MazeCell:
        if not self.in_bounds((row, col)):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.rows}x{self.cols} maze")
        return self._cells[row][col]

    def __iter__(self) -> Iterator[MazeCell]:
        for row in self._cells:
            yield from row

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MazeGrid):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"MazeGrid(rows={self.rows}, cols={self.cols})"

    def in_bounds(self, position: Position) -> bool:
        r, c = position
        return 0 <= r < self.rows and 0 <= c < self.cols

    def can_move(self, position: Position, direction: str) -> bool:
        return self.move(position, direction) is not None

    def move(self, position: Position, direction: str) -> Optional[Position]:
        """Step one cell in ``direction``; ``None`` when a wall or the border blocks it."""

        try:
            dr, dc, side = DIRECTIONS[direction]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {direction!r}") from exc
        r, c = position
        if self.cell(r, c).has_wall(side):
            return None
        target = (r + dr, c + dc)
        if not self.in_bounds(target):
            return None
        return target

    def open_neighbors(self, row: int, col: int) -> List[Position]:
        neighbors: List[Position] = []
        for direction in DIRECTIONS:
            target = self.move((row, col), direction)
            if target is not None:
                neighbors.append(target)
        return neighbors

    def wall_array(self) -> np.ndarray:
        """Boolean array of shape (rows, cols, 4) ordered top, right, bottom, left."""

        return np.array(
            [[[cell.has_wall(side) for side in SIDES] for cell in row] for row in self._cells],
            dtype=bool,
        )

    def open_connections(self) -> int:
        """Count passages between adjacent cells, each counted once."""

        walls = self.wall_array()
        horizontal = np.count_nonzero(~walls[:, :-1, 1])
        vertical = np.count_nonzero(~walls[:-1, :, 2])
        return int(horizontal + vertical)

    def to_block_grid(self) -> List[List[int]]:
        """Expand walls into a (2*rows+1) x (2*cols+1) grid of WALL/PATH blocks.

        Cell (r, c) lands on block (2r+1, 2c+1); the block between two cells is
        PATH when the passage between them is open.
        """

        walls = self.wall_array()
        blocks = np.full((2 * self.rows + 1, 2 * self.cols + 1), WALL, dtype=np.uint8)
        blocks[1::2, 1::2] = PATH
        blocks[1::2, 2:-1:2][~walls[:, :-1, 1]] = PATH
        blocks[2:-1:2, 1::2][~walls[:-1, :, 2]] = PATH
        return blocks.tolist()

    def solve(self, start: Position, goal: Position) -> List[Position]:
        """Breadth-first shortest path through open walls, empty when unreachable."""

        if not self.in_bounds(start) or not self.in_bounds(goal):
            return []
        queue: deque[Position] = deque([start])
        parents: Dict[Position, Optional[Position]] = {start: None}
        while queue:
            current = queue.popleft()
            if current == goal:
                break
            for neighbor in self.open_neighbors(*current):
                if neighbor not in parents:
                    parents[neighbor] = current
                    queue.append(neighbor)

        if goal not in parents:
            return []
        node: Optional[Position] = goal
        result: List[Position] = []
        while node is not None:
            result.append(node)
            node = parents[node]
        result.reverse()
        return result

    def to_dict(self) -> dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "cells": [[cell.to_dict() for cell in row] for row in self._cells],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "MazeGrid":
        cells = [
            [
                MazeCell(
                    row=int(cell["row"]),
                    col=int(cell["col"]),
                    top=bool(cell["top"]),
                    right=bool(cell["right"]),
                    bottom=bool(cell["bottom"]),
                    left=bool(cell["left"]),
                )
                for cell in row
            ]
            for row in payload["cells"]
        ]
        return cls(cells)


def generate_maze(rows: int, cols: int, *, rng: Optional[random.Random] = None) -> MazeGrid:
    """Carve a perfect maze with a depth-first recursive backtracker.

    Every wall starts standing. Starting from (0, 0) the carver repeatedly
    knocks down the wall to a uniformly chosen unvisited neighbour of the cell
    on top of the stack, and pops the stack when no such neighbour remains.
    The open passages form a spanning tree over the grid.
    """

    rows, cols = validate_dimensions(rows, cols)
    rng = rng or random.Random()

    open_sides: List[List[set]] = [[set() for _ in range(cols)] for _ in range(rows)]
    visited = [[False] * cols for _ in range(rows)]

    visited[0][0] = True
    stack: List[Position] = [(0, 0)]
    while stack:
        r, c = stack[-1]
        candidates = []
        for dr, dc, side in DIRECTIONS.values():
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and not visited[nr][nc]:
                candidates.append((nr, nc, side))

        if candidates:
            nr, nc, side = rng.choice(candidates)
            visited[nr][nc] = True
            open_sides[r][c].add(side)
            open_sides[nr][nc].add(OPPOSITE[side])
            stack.append((nr, nc))
        else:
            stack.pop()

    cells = [
        [
            MazeCell(
                row=r,
                col=c,
                top="top" not in open_sides[r][c],
                right="right" not in open_sides[r][c],
                bottom="bottom" not in open_sides[r][c],
                left="left" not in open_sides[r][c],
            )
            for c in range(cols)
        ]
        for r in range(rows)
    ]
    return MazeGrid(cells)


__all__ = [
    "DIRECTIONS",
    "MazeCell",
    "MazeGrid",
    "PATH",
    "Position",
    "SIDES",
    "WALL",
    "generate_maze",
]
