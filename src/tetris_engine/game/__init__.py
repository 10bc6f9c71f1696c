"""Game module for the Tetris engine.

Exports the core game engine and supporting classes:
- Board: fixed 10x20 grid, collision checks, locking and row compaction
- Piece: active tetromino with clockwise rotation
- ShapeKind / SHAPES: the seven catalog entries and their colors
- ScoringRules / LineClearer: line scoring and delayed compaction
- Controls / Action: key and held-button translation with repeat delay
- GameConfig: timing configuration
- TetrisGame: main game loop and state management
"""

from .board import Board, COLUMNS, ROWS
from .config import GameConfig
from .controls import Action, Controls
from .core import GameSnapshot, GameStatus, PieceView, TetrisGame
from .pieces import Piece, rotate_cw
from .rules import ClearResult, LineClearer, ScoringRules
from .shapes import SHAPES, CatalogEntry, ShapeKind, entry_for, random_shape
from .timing import DropTimer, SpeedRamp

__all__ = [
    "Board",
    "COLUMNS",
    "ROWS",
    "GameConfig",
    "Action",
    "Controls",
    "GameSnapshot",
    "GameStatus",
    "PieceView",
    "TetrisGame",
    "Piece",
    "rotate_cw",
    "ClearResult",
    "LineClearer",
    "ScoringRules",
    "SHAPES",
    "CatalogEntry",
    "ShapeKind",
    "entry_for",
    "random_shape",
    "DropTimer",
    "SpeedRamp",
]
