from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Tunable timing for a game; all durations are in milliseconds."""

    random_seed: Optional[int] = None
    initial_fall_interval: float = 800.0
    speed_increase_interval: float = 30000.0
    speed_increase_factor: float = 0.85
    line_clear_delay: float = 600.0
    initial_move_delay: float = 200.0
    move_delay: float = 100.0
    max_frame_time: float = 1000.0

    def __post_init__(self) -> None:
        for name in (
            "initial_fall_interval",
            "speed_increase_interval",
            "initial_move_delay",
            "move_delay",
            "max_frame_time",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.line_clear_delay < 0:
            raise ValueError(f"line_clear_delay must not be negative, got {self.line_clear_delay!r}")
        if not 0 < self.speed_increase_factor <= 1:
            raise ValueError(
                f"speed_increase_factor must be in (0, 1], got {self.speed_increase_factor!r}"
            )
