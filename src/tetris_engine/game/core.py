from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

import numpy as np

from .board import ROWS, Board
from .config import GameConfig
from .controls import Action, Controls, parse_action
from .pieces import Piece
from .rules import ClearResult, LineClearer, ScoringRules
from .shapes import Shape, ShapeKind, entry_for, random_shape
from .timing import DropTimer, SpeedRamp


logger = logging.getLogger(__name__)


class GameStatus(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PieceView:
    kind: ShapeKind
    shape: Shape
    x: int
    y: int
    color: str


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game for renderers and agents."""

    cells: np.ndarray
    pending_rows: FrozenSet[int]
    active: Optional[PieceView]
    next: PieceView
    score: int
    lines_cleared: int
    status: GameStatus
    fall_interval: float

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED


def _view(piece: Piece) -> PieceView:
    return PieceView(piece.kind, piece.shape, piece.x, piece.y, entry_for(piece.kind).color)


class TetrisGame:
    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.board = Board()
        self.lines = LineClearer(self.rules, self.config.line_clear_delay)
        self.controls = Controls(self.config.initial_move_delay, self.config.move_delay)
        self.gravity = DropTimer()
        self.speed: SpeedRamp
        self.current_piece: Piece
        self.next_piece: Piece
        self.status = GameStatus.RUNNING
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.elapsed = 0.0
        self.start()

    # Lifecycle

    def start(self) -> None:
        self.board.reset()
        self.lines.reset()
        self.controls.reset()
        self.speed = SpeedRamp(
            self.config.initial_fall_interval,
            self.config.speed_increase_interval,
            self.config.speed_increase_factor,
        )
        self.gravity.reset()
        self.status = GameStatus.RUNNING
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.elapsed = 0.0
        self.next_piece = Piece.spawn(random_shape(self.rng))
        self.spawn_next()
        logger.info("game started")

    def restart(self) -> None:
        self.start()

    def toggle_pause(self) -> None:
        if self.status is GameStatus.GAME_OVER:
            return
        if self.status is GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
            # Resume with an empty drop counter
            self.gravity.reset()
        else:
            self.status = GameStatus.PAUSED

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    @property
    def fall_interval(self) -> float:
        return self.speed.fall_interval

    @property
    def pending_rows(self) -> FrozenSet[int]:
        return self.lines.pending_rows

    # Placement

    def spawn_next(self) -> None:
        self.current_piece = self.next_piece
        self.next_piece = Piece.spawn(random_shape(self.rng))
        # Overlap right at spawn means the stack reached the top
        if self.collides(self.current_piece.shape, self.current_piece.x, self.current_piece.y):
            self.status = GameStatus.GAME_OVER
            logger.info("game over: score=%d lines=%d", self.score, self.lines_cleared_total)

    def collides(self, shape: Shape, x: int, y: int) -> bool:
        return self.board.collides(shape, x, y)

    def try_move(self, dx: int, dy: int) -> bool:
        if self.status is not GameStatus.RUNNING:
            return False
        piece = self.current_piece
        new_x = piece.x + dx
        new_y = piece.y + dy
        if not self.collides(piece.shape, new_x, new_y):
            piece.x = new_x
            piece.y = new_y
            return True
        if dy > 0:
            self._lock_piece()
            self.check_and_clear()
            self.spawn_next()
        return False

    def try_rotate(self) -> bool:
        if self.status is not GameStatus.RUNNING:
            return False
        piece = self.current_piece
        rotated = piece.rotated_shape()
        # No kicks: a colliding rotation is simply refused
        if self.collides(rotated, piece.x, piece.y):
            return False
        piece.shape = rotated
        return True

    def _lock_piece(self) -> None:
        piece = self.current_piece
        self.board.lock(piece.shape, piece.x, piece.y, piece.color)
        self.pieces_locked += 1

    def check_and_clear(self) -> ClearResult:
        result = self.lines.check_and_clear(self.board)
        self.lines_cleared_total += result.lines
        self.score += result.points
        return result

    # Actions

    def move_left(self) -> bool:
        return self.try_move(-1, 0)

    def move_right(self) -> bool:
        return self.try_move(1, 0)

    def soft_drop(self) -> bool:
        return self.try_move(0, 1)

    def rotate(self) -> bool:
        return self.try_rotate()

    def hard_drop(self) -> None:
        for _ in range(ROWS + 1):
            if not self.try_move(0, 1):
                break

    def perform(self, action: Action) -> None:
        if action is Action.RESTART:
            if self.status is GameStatus.GAME_OVER:
                self.restart()
        elif action is Action.TOGGLE_PAUSE:
            self.toggle_pause()
        elif action is Action.MOVE_LEFT:
            self.move_left()
        elif action is Action.MOVE_RIGHT:
            self.move_right()
        elif action is Action.ROTATE:
            self.rotate()
        elif action is Action.SOFT_DROP:
            self.soft_drop()
        elif action is Action.HARD_DROP:
            self.hard_drop()

    def key_down(self, key: str) -> None:
        action = self.controls.translate_key(key)
        if action is None:
            return
        if self.status is GameStatus.PAUSED and action is not Action.TOGGLE_PAUSE:
            return
        self.perform(action)

    def press_action(self, name: str) -> None:
        action = parse_action(name)
        if action is None:
            return
        immediate = self.controls.press(action)
        if immediate is not None:
            self.perform(immediate)

    def release_action(self, name: str) -> None:
        action = parse_action(name)
        if action is not None:
            self.controls.release(action)

    # Loop

    def tick(self, delta_ms: float) -> None:
        if self.status is not GameStatus.RUNNING:
            return
        delta = float(delta_ms)
        if not math.isfinite(delta):
            logger.debug("ignoring non-finite frame time %r", delta_ms)
            return
        delta = min(max(delta, 0.0), self.config.max_frame_time)
        self.elapsed += delta

        self.lines.advance(self.board, delta)

        if self.speed.advance(delta):
            logger.debug("fall interval now %.1f ms", self.speed.fall_interval)

        for action in self.controls.poll(delta):
            self.perform(action)
        if self.status is not GameStatus.RUNNING:
            return

        if self.gravity.advance(delta, self.speed.fall_interval):
            self.try_move(0, 1)

    # State

    def snapshot(self) -> GameSnapshot:
        active = None if self.game_over else _view(self.current_piece)
        return GameSnapshot(
            cells=self.board.clone_state(),
            pending_rows=self.lines.pending_rows,
            active=active,
            next=_view(self.next_piece),
            score=self.score,
            lines_cleared=self.lines_cleared_total,
            status=self.status,
            fall_interval=self.speed.fall_interval,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.board.clone_state()
        if not self.game_over:
            piece = self.current_piece
            for x, y in piece.cells():
                if 0 <= y < self.board.height and 0 <= x < self.board.width:
                    # Negative marks the falling piece
                    state[y, x] = -piece.color
        return state

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_locked": self.pieces_locked,
            "lines_cleared": self.lines_cleared_total,
            "elapsed_ms": self.elapsed,
            "fall_interval": self.speed.fall_interval,
            "max_height": self.board.get_max_height(),
        }
