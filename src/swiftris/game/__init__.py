"""Game module for Swiftris.

Exports the falling-block engine and supporting classes:
- GameGrid: Fixed-size block storage and line clearing
- Piece: Four-block piece with table-driven rotation
- ShapeKind / Orientation: The seven shapes and their four rotation states
- ScoringRules: Score, level and gravity curve
- SwiftrisGame: Engine state machine that queues notifications for the host
"""

from .blocks import Block, BlockColor
from .grid import ClearResult, GameGrid, GridIndexError
from .pieces import (
    BOTTOM_CELLS,
    GEOMETRY,
    GeometryError,
    Orientation,
    Piece,
    ShapeKind,
    random_kind,
    random_orientation,
)
from .rules import ScoringRules
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
from .core import Action, GameConfig, GameState, SwiftrisGame

__all__ = [
    "Block",
    "BlockColor",
    "ClearResult",
    "GameGrid",
    "GridIndexError",
    "BOTTOM_CELLS",
    "GEOMETRY",
    "GeometryError",
    "Orientation",
    "Piece",
    "ShapeKind",
    "random_kind",
    "random_orientation",
    "ScoringRules",
    "BoardCleared",
    "GameBegun",
    "GameEnded",
    "GameEvent",
    "LevelUp",
    "LinesCleared",
    "PieceDropped",
    "PieceLanded",
    "PieceMoved",
    "Action",
    "GameConfig",
    "GameState",
    "SwiftrisGame",
]
