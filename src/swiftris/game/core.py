from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Deque, List, Optional, Tuple

import numpy as np

from .blocks import Block
from .events import (
    BoardCleared,
    GameBegun,
    GameEnded,
    GameEvent,
    LevelUp,
    LinesCleared,
    PieceDropped,
    PieceLanded,
    PieceMoved,
)
from .grid import ClearResult, GameGrid
from .pieces import Orientation, Piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)

NUM_COLUMNS = 10
NUM_ROWS = 20

STARTING_COLUMN = 4
STARTING_ROW = 0

# Off-board slot where the upcoming piece waits
PREVIEW_COLUMN = 12
PREVIEW_ROW = 1


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


class GameState(Enum):
    IDLE = "idle"
    READY = "ready"
    ACTIVE = "active"
    LANDING = "landing"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    columns: int = NUM_COLUMNS
    rows: int = NUM_ROWS
    start_column: int = STARTING_COLUMN
    start_row: int = STARTING_ROW
    preview_column: int = PREVIEW_COLUMN
    preview_row: int = PREVIEW_ROW
    random_seed: Optional[int] = None
    # When False the engine waits in LANDING until the host spawns the next piece
    auto_spawn: bool = True


class SwiftrisGame:
    """Falling-block game engine.

    Owns the grid, the falling piece and the next piece. The host drives it
    with gravity ticks and movement commands, then reads the resulting
    notifications with :meth:`drain_events`. Illegal moves are rejected
    silently; bad grid coordinates raise.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.columns, self.config.rows)
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.state = GameState.IDLE
        self._falling: Optional[Piece] = None
        self._next: Optional[Piece] = None
        self._events: Deque[GameEvent] = deque()

    # ---------- Read-only views ----------
    @property
    def falling_piece(self) -> Optional[Piece]:
        return self._falling

    @property
    def next_piece(self) -> Optional[Piece]:
        return self._next

    @property
    def tick_interval_ms(self) -> int:
        return self.rules.tick_interval_ms(self.level)

    @property
    def is_active(self) -> bool:
        return self.state is GameState.ACTIVE

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def drain_events(self) -> List[GameEvent]:
        events = list(self._events)
        self._events.clear()
        return events

    def _emit(self, event: GameEvent) -> None:
        self._events.append(event)

    # ---------- Lifecycle ----------
    def reset(self, seed: Optional[int] = None) -> None:
        """Start a fresh game with a falling piece already on the board."""
        if seed is not None:
            self.rng.seed(seed)
        self._falling = None
        self._next = None
        self._events.clear()
        self.begin_game()
        self.spawn_next_falling_piece()

    def begin_game(self) -> None:
        self.grid.clear_all_cells()
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self._falling = None
        if self._next is None:
            self._next = self._new_piece()
        self.state = GameState.READY
        logger.debug("game begun, next piece %r", self._next)
        self._emit(GameBegun())

    def _new_piece(self) -> Piece:
        return Piece.random(self.config.preview_column, self.config.preview_row, self.rng)

    def spawn_next_falling_piece(self) -> Tuple[Optional[Piece], Optional[Piece]]:
        """Promote the next piece to falling and queue a fresh next piece.

        Returns ``(None, None)`` and ends the game when the start position is
        already occupied.
        """
        if self.state not in (GameState.READY, GameState.LANDING) or self._next is None:
            return self._falling, self._next

        falling = self._next
        falling.move_to(self.config.start_column, self.config.start_row)
        self._next = self._new_piece()

        if not self.grid.can_place(falling.cells_at()):
            falling.move_to(self.config.preview_column, self.config.preview_row)
            self._next = falling
            self._falling = None
            self._end_game()
            return None, None

        self._falling = falling
        self.state = GameState.ACTIVE
        logger.debug("spawned %r", falling)
        return falling, self._next

    def _end_game(self) -> None:
        self.state = GameState.GAME_OVER
        logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines_cleared)
        self._emit(GameEnded())
        removed = self.remove_all_blocks()
        self._emit(BoardCleared(blocks=tuple(removed)))

    def remove_all_blocks(self) -> List[Block]:
        return self.grid.clear_all_cells()

    # ---------- Commands ----------
    def _can_move(self, d_column: int, d_row: int, orientation: Optional[Orientation] = None) -> bool:
        assert self._falling is not None
        return self.grid.can_place(self._falling.cells_at(d_column, d_row, orientation))

    def _detect_touch(self) -> bool:
        assert self._falling is not None
        for block in self._falling.bottom_blocks():
            if block.row == self.grid.rows - 1:
                return True
            if self.grid[block.column, block.row + 1] is not None:
                return True
        return False

    def tick(self) -> bool:
        """One gravity step. Returns True if the piece moved down."""
        if not self.is_active or self._falling is None:
            return False
        if self._detect_touch():
            self._settle()
            return False
        self._falling.lower_by_one_row()
        self._emit(PieceMoved())
        return True

    def _shift(self, d_column: int) -> bool:
        if not self.is_active or self._falling is None:
            return False
        if not self._can_move(d_column, 0):
            return False
        self._falling.translate(d_column, 0)
        self._emit(PieceMoved())
        return True

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def rotate(self, clockwise: bool = True) -> bool:
        if not self.is_active or self._falling is None:
            return False
        if not self._can_move(0, 0, self._falling.orientation.rotate(clockwise)):
            return False
        self._falling.rotate(clockwise)
        self._emit(PieceMoved())
        return True

    def drop(self) -> bool:
        if not self.is_active or self._falling is None:
            return False
        while self._can_move(0, 1):
            self._falling.lower_by_one_row()
        self._emit(PieceDropped())
        self._settle()
        return True

    def step(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE_CW:
            return self.rotate(clockwise=True)
        if action == Action.ROTATE_CCW:
            return self.rotate(clockwise=False)
        if action == Action.SOFT_DROP:
            return self.tick()
        if action == Action.HARD_DROP:
            return self.drop()
        return False

    # ---------- Landing ----------
    def _settle(self) -> None:
        piece = self._falling
        assert piece is not None
        for block in piece.blocks:
            self.grid[block.column, block.row] = block
        self._falling = None
        self.state = GameState.LANDING
        logger.debug("landed %r", piece)
        self._emit(PieceLanded())
        self.process_landing()
        if self.config.auto_spawn:
            self.spawn_next_falling_piece()

    def process_landing(self) -> ClearResult:
        """Clear all full rows in one go, then update score and level."""
        result = self.grid.clear_full_rows()
        lines = result.lines_cleared
        if lines == 0:
            return result

        self.score += self.rules.score_for_lines(lines, self.level)
        self.lines_cleared += lines
        logger.debug("cleared rows %s, score=%d", result.rows, self.score)
        self._emit(
            LinesCleared(
                rows=tuple(result.rows),
                removed=tuple(tuple(row) for row in result.removed),
                shifted=dict(result.shifted),
            )
        )

        new_level = self.rules.level_for_lines(self.lines_cleared)
        while self.level < new_level:
            self.level += 1
            logger.info("level up: %d (tick %d ms)", self.level, self.tick_interval_ms)
            self._emit(LevelUp(level=self.level))
        return result

    def get_state(self) -> np.ndarray:
        # Falling piece overlaid as negative color values
        state = self.grid.to_array()
        if self._falling is not None:
            for block in self._falling.blocks:
                if self.grid.is_inside(block.column, block.row):
                    state[block.row, block.column] = -(int(block.color) + 1)
        return state
