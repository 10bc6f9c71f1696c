from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional


logger = logging.getLogger(__name__)


class Action(str, Enum):
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    ROTATE = "rotate"
    SOFT_DROP = "move-down"
    HARD_DROP = "hard-drop"
    TOGGLE_PAUSE = "pause"
    RESTART = "restart"


KEY_TO_ACTION: Dict[str, Action] = {
    "ArrowLeft": Action.MOVE_LEFT,
    "ArrowRight": Action.MOVE_RIGHT,
    "ArrowDown": Action.SOFT_DROP,
    "ArrowUp": Action.ROTATE,
    " ": Action.HARD_DROP,
    "p": Action.TOGGLE_PAUSE,
    "Enter": Action.RESTART,
}

# Polled every tick in this order.
HOLDABLE = (Action.MOVE_LEFT, Action.MOVE_RIGHT, Action.ROTATE, Action.SOFT_DROP)


def parse_action(name: str) -> Optional[Action]:
    try:
        return Action(name)
    except ValueError:
        logger.debug("ignoring unknown action %r", name)
        return None


class Controls:
    """Held-button state with an initial delay and a shorter repeat delay.

    `poll` releases one held action each time the gate opens, checking
    left, right, rotate, down in that order against a single shared
    timestamp. The first release after any press or release waits
    `initial_delay`, later ones `repeat_delay`.
    """

    def __init__(self, initial_delay: float = 200.0, repeat_delay: float = 100.0) -> None:
        self.initial_delay = initial_delay
        self.repeat_delay = repeat_delay
        self.held: Dict[Action, bool] = {action: False for action in HOLDABLE}
        self.first_move = True
        self.since_last_move = 0.0

    def reset(self) -> None:
        for action in HOLDABLE:
            self.held[action] = False
        self.first_move = True
        self.since_last_move = 0.0

    def translate_key(self, key: str) -> Optional[Action]:
        action = KEY_TO_ACTION.get(key)
        if action is None:
            logger.debug("ignoring unmapped key %r", key)
        return action

    def press(self, action: Action) -> Optional[Action]:
        """Record a button press; returns an action to perform right away."""
        if action not in self.held:
            return action
        self.held[action] = True
        self._rearm()
        return None

    def release(self, action: Action) -> None:
        if action in self.held:
            self.held[action] = False
        self._rearm()

    def poll(self, delta: float) -> List[Action]:
        if not any(self.held.values()):
            return []
        self.since_last_move += delta
        wait = self.initial_delay if self.first_move else self.repeat_delay
        if self.since_last_move < wait:
            return []
        self.since_last_move = 0.0
        self.first_move = False
        # The first held action in HOLDABLE order consumes the gate for this tick
        for action in HOLDABLE:
            if self.held[action]:
                return [action]
        return []

    def _rearm(self) -> None:
        self.first_move = True
        self.since_last_move = 0.0
