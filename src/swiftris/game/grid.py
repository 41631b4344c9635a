from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .blocks import Block


Coordinate = Tuple[int, int]


class GridIndexError(IndexError):
    """Raised for grid coordinates outside the declared dimensions."""


@dataclass
class ClearResult:
    rows: List[int] = field(default_factory=list)
    removed: List[List[Block]] = field(default_factory=list)
    shifted: Dict[Block, Block] = field(default_factory=dict)

    @property
    def lines_cleared(self) -> int:
        return len(self.rows)


class GameGrid:
    """Fixed-size board of optional blocks.

    Cells live in a flat object array indexed by ``row * columns + column``;
    row 0 is the top of the board. Empty cells hold ``None``.
    """

    def __init__(self, columns: int, rows: int) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError(f"grid dimensions must be positive, got {columns}x{rows}")
        self.columns = int(columns)
        self.rows = int(rows)
        self.cells = np.full(self.columns * self.rows, None, dtype=object)

    def _index(self, column: int, row: int) -> int:
        if not self.is_inside(column, row):
            raise GridIndexError(
                f"cell ({column}, {row}) outside {self.columns}x{self.rows} grid"
            )
        return row * self.columns + column

    def is_inside(self, column: int, row: int) -> bool:
        return 0 <= column < self.columns and 0 <= row < self.rows

    def get(self, column: int, row: int) -> Optional[Block]:
        return self.cells[self._index(column, row)]

    def set(self, column: int, row: int, value: Optional[Block]) -> None:
        self.cells[self._index(column, row)] = value

    def __getitem__(self, key: Coordinate) -> Optional[Block]:
        column, row = key
        return self.get(column, row)

    def __setitem__(self, key: Coordinate, value: Optional[Block]) -> None:
        column, row = key
        self.set(column, row, value)

    def _row(self, row: int) -> np.ndarray:
        if not 0 <= row < self.rows:
            raise GridIndexError(f"row {row} outside grid with {self.rows} rows")
        start = row * self.columns
        return self.cells[start : start + self.columns]

    def is_row_full(self, row: int) -> bool:
        return all(cell is not None for cell in self._row(row))

    def is_row_empty(self, row: int) -> bool:
        return all(cell is None for cell in self._row(row))

    def can_place(self, positions: Iterable[Coordinate]) -> bool:
        for column, row in positions:
            if not self.is_inside(column, row):
                return False
            if self.cells[row * self.columns + column] is not None:
                return False
        return True

    def blocks(self) -> Iterator[Block]:
        for cell in self.cells:
            if cell is not None:
                yield cell

    def occupied_count(self) -> int:
        return sum(1 for _ in self.blocks())

    def clear_all_cells(self) -> List[Block]:
        removed = list(self.blocks())
        self.cells.fill(None)
        return removed

    def clear_full_rows(self) -> ClearResult:
        """Remove every full row at once and let the rows above fall.

        Each surviving block drops by the number of removed rows beneath it.
        Removed rows are reported bottom first.
        """
        result = ClearResult()
        result.rows = [row for row in range(self.rows - 1, -1, -1) if self.is_row_full(row)]
        if not result.rows:
            return result

        board = self.cells.reshape(self.rows, self.columns)
        result.removed = [list(board[row]) for row in result.rows]

        full = set(result.rows)
        target = self.rows - 1
        for row in range(self.rows - 1, -1, -1):
            if row in full:
                continue
            if target != row:
                for column in range(self.columns):
                    block = board[row, column]
                    if block is not None:
                        fallen = block.moved(0, target - row)
                        result.shifted[block] = fallen
                        board[target, column] = fallen
                    else:
                        board[target, column] = None
            target -= 1
        # Rows 0..target are left over once everything has fallen.
        board[: target + 1, :] = None
        return result

    def to_array(self) -> np.ndarray:
        state = np.zeros((self.rows, self.columns), dtype=np.int8)
        for block in self.blocks():
            state[block.row, block.column] = int(block.color) + 1
        return state
