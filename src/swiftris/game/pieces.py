from __future__ import annotations

import random
from enum import IntEnum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .blocks import Block, BlockColor


class GeometryError(KeyError):
    """Raised when the geometry table has no entry for a kind/orientation pair."""


class Orientation(IntEnum):
    ZERO = 0
    NINETY = 1
    ONE_EIGHTY = 2
    TWO_SEVENTY = 3

    def rotate(self, clockwise: bool = True) -> "Orientation":
        return Orientation((self + (1 if clockwise else -1)) % len(Orientation))

    def __str__(self) -> str:
        return str(int(self) * 90)


class ShapeKind(IntEnum):
    SQUARE = 0
    LINE = 1
    T = 2
    L = 3
    J = 4
    S = 5
    Z = 6


Offset = Tuple[int, int]
Offsets = Tuple[Offset, Offset, Offset, Offset]


def _cycle(zero: Offsets, ninety: Offsets, one_eighty: Offsets, two_seventy: Offsets) -> Mapping[Orientation, Offsets]:
    return MappingProxyType({
        Orientation.ZERO: zero,
        Orientation.NINETY: ninety,
        Orientation.ONE_EIGHTY: one_eighty,
        Orientation.TWO_SEVENTY: two_seventy,
    })


# (column, row) offsets from the anchor; rows grow downward.
GEOMETRY: Mapping[ShapeKind, Mapping[Orientation, Offsets]] = MappingProxyType({
    ShapeKind.SQUARE: _cycle(
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
        ((0, 0), (1, 0), (0, 1), (1, 1)),
    ),
    ShapeKind.LINE: _cycle(
        ((0, 0), (0, 1), (0, 2), (0, 3)),
        ((-1, 0), (0, 0), (1, 0), (2, 0)),
        ((0, 0), (0, 1), (0, 2), (0, 3)),
        ((-1, 0), (0, 0), (1, 0), (2, 0)),
    ),
    ShapeKind.T: _cycle(
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((2, 1), (1, 0), (1, 1), (1, 2)),
        ((1, 2), (0, 1), (1, 1), (2, 1)),
        ((0, 1), (1, 0), (1, 1), (1, 2)),
    ),
    ShapeKind.L: _cycle(
        ((0, 0), (0, 1), (0, 2), (1, 2)),
        ((1, 1), (0, 1), (-1, 1), (-1, 2)),
        ((0, 2), (0, 1), (0, 0), (-1, 0)),
        ((-1, 1), (0, 1), (1, 1), (1, 0)),
    ),
    ShapeKind.J: _cycle(
        ((1, 0), (1, 1), (1, 2), (0, 2)),
        ((2, 1), (1, 1), (0, 1), (0, 0)),
        ((0, 2), (0, 1), (0, 0), (1, 0)),
        ((0, 0), (1, 0), (2, 0), (2, 1)),
    ),
    ShapeKind.S: _cycle(
        ((0, 0), (0, 1), (1, 1), (1, 2)),
        ((2, 0), (1, 0), (1, 1), (0, 1)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
        ((2, 0), (1, 0), (1, 1), (0, 1)),
    ),
    ShapeKind.Z: _cycle(
        ((1, 0), (1, 1), (0, 1), (0, 2)),
        ((-1, 0), (0, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (0, 1), (0, 2)),
        ((-1, 0), (0, 0), (0, 1), (1, 1)),
    ),
})

# Indices into GEOMETRY of the cells with nothing of the same piece beneath them.
BOTTOM_CELLS: Mapping[ShapeKind, Mapping[Orientation, Tuple[int, ...]]] = MappingProxyType({
    ShapeKind.SQUARE: _cycle((2, 3), (2, 3), (2, 3), (2, 3)),
    ShapeKind.LINE: _cycle((3,), (0, 1, 2, 3), (3,), (0, 1, 2, 3)),
    ShapeKind.T: _cycle((1, 2, 3), (0, 3), (0, 1, 3), (0, 3)),
    ShapeKind.L: _cycle((2, 3), (0, 1, 3), (0, 3), (0, 1, 2)),
    ShapeKind.J: _cycle((2, 3), (0, 1, 2), (0, 3), (0, 1, 3)),
    ShapeKind.S: _cycle((1, 3), (0, 2, 3), (1, 3), (0, 2, 3)),
    ShapeKind.Z: _cycle((1, 3), (0, 2, 3), (1, 3), (0, 2, 3)),
})


def offsets_for(kind: ShapeKind, orientation: Orientation) -> Offsets:
    try:
        return GEOMETRY[kind][orientation]
    except KeyError:
        raise GeometryError(f"no geometry for {kind!r} at {orientation!r}") from None


def _check_tables() -> None:
    for kind in ShapeKind:
        for orientation in Orientation:
            offsets = offsets_for(kind, orientation)
            if len(offsets) != 4 or len(set(offsets)) != 4:
                raise GeometryError(f"{kind.name} at {orientation} needs 4 distinct cells")
            if kind not in BOTTOM_CELLS or orientation not in BOTTOM_CELLS[kind]:
                raise GeometryError(f"no bottom cells for {kind.name} at {orientation}")


_check_tables()


def random_kind(rng: Optional[random.Random] = None) -> ShapeKind:
    return (rng or random).choice(list(ShapeKind))


def random_orientation(rng: Optional[random.Random] = None) -> Orientation:
    return (rng or random).choice(list(Orientation))


class Piece:
    """Four blocks of one color moving together around an anchor.

    The piece only does geometry: it never checks the grid. Equality is
    identity, the engine holds at most one falling and one next piece.
    """

    def __init__(
        self,
        kind: ShapeKind,
        column: int,
        row: int,
        color: BlockColor,
        orientation: Orientation = Orientation.ZERO,
    ) -> None:
        self.kind = ShapeKind(kind)
        self.color = BlockColor(color)
        self.column = column
        self.row = row
        self.orientation = Orientation(orientation)
        self.blocks: List[Block] = []
        self._initialize_blocks()

    @classmethod
    def random(cls, column: int, row: int, rng: Optional[random.Random] = None) -> "Piece":
        return cls(
            kind=random_kind(rng),
            column=column,
            row=row,
            color=BlockColor.random(rng),
            orientation=random_orientation(rng),
        )

    def _initialize_blocks(self) -> None:
        self.blocks = [
            Block(self.color, column, row) for column, row in self.cells_at()
        ]

    def cells_at(self, d_column: int = 0, d_row: int = 0, orientation: Optional[Orientation] = None) -> List[Tuple[int, int]]:
        """Absolute cell positions if the piece were shifted and/or reoriented."""
        if orientation is None:
            orientation = self.orientation
        column = self.column + d_column
        row = self.row + d_row
        return [(column + dc, row + dr) for dc, dr in offsets_for(self.kind, orientation)]

    def bottom_blocks(self) -> List[Block]:
        return [self.blocks[i] for i in BOTTOM_CELLS[self.kind][self.orientation]]

    def rotate(self, clockwise: bool = True) -> None:
        self.orientation = self.orientation.rotate(clockwise)
        self._initialize_blocks()

    def translate(self, d_column: int, d_row: int) -> None:
        self.column += d_column
        self.row += d_row
        self.blocks = [block.moved(d_column, d_row) for block in self.blocks]

    def move_to(self, column: int, row: int) -> None:
        self.translate(column - self.column, row - self.row)

    def lower_by_one_row(self) -> None:
        self.translate(0, 1)

    def raise_by_one_row(self) -> None:
        self.translate(0, -1)

    def shift_left_by_one_column(self) -> None:
        self.translate(-1, 0)

    def shift_right_by_one_column(self) -> None:
        self.translate(1, 0)

    def __repr__(self) -> str:
        cells = ", ".join(str(block) for block in self.blocks)
        return f"Piece({self.kind.name}, {self.color} facing {self.orientation}: {cells})"
