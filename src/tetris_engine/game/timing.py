from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SpeedRamp:
    """Shrinks the fall interval by a fixed factor every `period` ms."""

    fall_interval: float
    period: float
    factor: float
    elapsed: float = 0.0

    def advance(self, delta: float) -> bool:
        self.elapsed += delta
        if self.elapsed < self.period:
            return False
        self.fall_interval *= self.factor
        self.elapsed = 0.0
        return True


@dataclass
class DropTimer:
    counter: float = 0.0

    def reset(self) -> None:
        self.counter = 0.0

    def advance(self, delta: float, interval: float) -> bool:
        # Overshoot is discarded, not carried into the next drop.
        self.counter += delta
        if self.counter > interval:
            self.counter = 0.0
            return True
        return False
