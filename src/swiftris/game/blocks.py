from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class BlockColor(IntEnum):
    BLUE = 0
    ORANGE = 1
    PURPLE = 2
    RED = 3
    TEAL = 4
    YELLOW = 5

    @property
    def sprite_name(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.sprite_name

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "BlockColor":
        return (rng or random).choice(list(cls))


@dataclass(frozen=True)
class Block:
    """A single occupied cell.

    Blocks are immutable; moving one produces a new instance. Equality covers
    color, column and row.
    """

    color: BlockColor
    column: int
    row: int

    def moved(self, d_column: int, d_row: int) -> "Block":
        return Block(self.color, self.column + d_column, self.row + d_row)

    def __str__(self) -> str:
        return f"{self.color}: [{self.column}, {self.row}]"
