"""Gymnasium environments for the Tetris engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default Tetris environment (6 discrete actions, one frame per step)
register(
    id="Tetris-v0",
    entry_point="tetris_engine.env.tetris_env:TetrisEnv",
)

__all__ = ["Tetris-v0"]
