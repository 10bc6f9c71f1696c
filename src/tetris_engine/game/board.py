from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .shapes import Shape


COLUMNS = 10
ROWS = 20

EMPTY = 0


class Board:
    """Fixed 10x20 grid of locked cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the color ids of the catalog entry that locked there.
    Row 0 is the top of the board; pieces may sit above it (negative y)
    while spawning.
    """

    def __init__(self) -> None:
        self.width = COLUMNS
        self.height = ROWS
        self.cells = np.zeros((ROWS, COLUMNS), dtype=np.int8)

    def reset(self) -> None:
        self.cells.fill(EMPTY)

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < COLUMNS and y < ROWS

    def _check_cell(self, x: int, y: int) -> None:
        # numpy would wrap negative indices to the far edge
        if not (0 <= x < COLUMNS and 0 <= y < ROWS):
            raise IndexError(f"cell ({x}, {y}) is outside the {COLUMNS}x{ROWS} board")

    def is_occupied(self, x: int, y: int) -> bool:
        if y < 0:
            if not 0 <= x < COLUMNS:
                raise IndexError(f"column {x} is outside the board")
            return False
        self._check_cell(x, y)
        return bool(self.cells[y, x] != EMPTY)

    def color_at(self, x: int, y: int) -> int:
        self._check_cell(x, y)
        return int(self.cells[y, x])

    def collides(self, shape: Shape, x: int, y: int) -> bool:
        """True if `shape` with its top-left cell at (x, y) cannot be there."""
        rows, cols = np.nonzero(shape)
        for bx, by in zip(cols + x, rows + y):
            if not self.is_in_bounds(int(bx), int(by)):
                return True
            if self.is_occupied(int(bx), int(by)):
                return True
        return False

    def lock(self, shape: Shape, x: int, y: int, color: int) -> int:
        """Write `color` into the shape's cells; returns the number written.

        Cells above the top row are dropped without touching the board. Cells
        off the sides or below the floor raise IndexError before any write.
        """
        rows, cols = np.nonzero(shape)
        targets = [(int(bx), int(by)) for bx, by in zip(cols + x, rows + y) if by >= 0]
        for bx, by in targets:
            self._check_cell(bx, by)
        for bx, by in targets:
            self.cells[by, bx] = color
        return len(targets)

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.cells != EMPTY, axis=1))]

    def clear_rows(self, rows: Iterable[int]) -> int:
        """Remove `rows` at once and push empty rows in from the top."""
        doomed = sorted(set(int(r) for r in rows))
        if not doomed:
            return 0
        kept = np.delete(self.cells, doomed, axis=0)
        fresh = np.zeros((len(doomed), COLUMNS), dtype=np.int8)
        self.cells = np.vstack((fresh, kept))
        return len(doomed)

    def get_max_height(self) -> int:
        non_empty_rows = np.flatnonzero(np.any(self.cells != EMPTY, axis=1))
        if non_empty_rows.size == 0:
            return 0
        return ROWS - int(non_empty_rows[0])

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
