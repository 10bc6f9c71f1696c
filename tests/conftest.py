from __future__ import annotations

from typing import Optional

import pytest

from tetris_engine.game import GameConfig, Piece, ShapeKind, TetrisGame, entry_for


@pytest.fixture
def game() -> TetrisGame:
    return TetrisGame(GameConfig(random_seed=7))


@pytest.fixture
def set_active():
    """Replace the falling piece with a fresh one of the given kind."""

    def _set(game: TetrisGame, kind: ShapeKind, x: Optional[int] = None, y: int = 0) -> Piece:
        piece = Piece.spawn(entry_for(kind))
        if x is not None:
            piece.x = x
        piece.y = y
        game.current_piece = piece
        return piece

    return _set
