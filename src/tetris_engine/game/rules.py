from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Set

from .board import Board


logger = logging.getLogger(__name__)


@dataclass
class ScoringRules:
    points_per_line: int = 100

    def score_for_lines(self, lines: int) -> int:
        # Flat rate per line, no bonus for simultaneous clears.
        if lines <= 0:
            return 0
        return lines * self.points_per_line


@dataclass
class ClearResult:
    lines: int
    points: int


@dataclass
class LineClearer:
    """Scores full rows at once and compacts them after a visual delay.

    Rows stay on the board while pending so a renderer can flash them.
    """

    rules: ScoringRules
    delay: float
    pending: Set[int] = field(default_factory=set)
    remaining: float = 0.0

    @property
    def pending_rows(self) -> FrozenSet[int]:
        return frozenset(self.pending)

    def reset(self) -> None:
        self.pending.clear()
        self.remaining = 0.0

    def check_and_clear(self, board: Board) -> ClearResult:
        """Flag newly full rows and score them.

        Rows already waiting for compaction are not scored twice. A new
        clear re-arms the delay for the whole pending set.
        """
        rows = [r for r in board.full_rows() if r not in self.pending]
        if not rows:
            return ClearResult(lines=0, points=0)
        self.pending.update(rows)
        self.remaining = self.delay
        gained = self.rules.score_for_lines(len(rows))
        logger.debug("rows %s full, +%d points", rows, gained)
        return ClearResult(lines=len(rows), points=gained)

    def advance(self, board: Board, delta: float) -> int:
        """Count down the pending delay; compacts and returns rows removed."""
        if not self.pending:
            return 0
        self.remaining -= delta
        if self.remaining > 0:
            return 0
        cleared = board.clear_rows(self.pending)
        self.reset()
        return cleared
