"""Notifications queued by the engine for its host.

The engine never calls back into the host. Every command appends events to
a queue in the order they happen; the host drains them after the call with
``SwiftrisGame.drain_events()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .blocks import Block


@dataclass(frozen=True)
class GameEvent:
    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class GameBegun(GameEvent):
    pass


@dataclass(frozen=True)
class GameEnded(GameEvent):
    pass


@dataclass(frozen=True)
class BoardCleared(GameEvent):
    """Every block left on the board after the game ended, now removed."""

    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class PieceLanded(GameEvent):
    pass


@dataclass(frozen=True)
class PieceMoved(GameEvent):
    pass


@dataclass(frozen=True)
class PieceDropped(GameEvent):
    pass


@dataclass(frozen=True)
class LinesCleared(GameEvent):
    """Rows removed in one landing, bottom first, and where surviving blocks fell."""

    rows: Tuple[int, ...] = ()
    removed: Tuple[Tuple[Block, ...], ...] = ()
    shifted: Dict[Block, Block] = field(default_factory=dict, hash=False, compare=False)

    @property
    def count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class LevelUp(GameEvent):
    level: int = 1
