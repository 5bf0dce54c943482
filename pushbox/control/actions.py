from __future__ import annotations

from enum import Enum
from typing import Optional

from pushbox.core.cells import Direction


class Action(Enum):
    """Discrete player commands: the four directions plus level navigation."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    PREVIOUS = "previous"
    NEXT = "next"
    RESTART = "restart"

    @property
    def direction(self) -> Optional[Direction]:
        return _DIRECTIONS.get(self)


_DIRECTIONS = {
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
    Action.UP: Direction.UP,
    Action.DOWN: Direction.DOWN,
}

KEY_BINDINGS: dict[str, Action] = {
    "left": Action.LEFT,
    "right": Action.RIGHT,
    "up": Action.UP,
    "down": Action.DOWN,
    "p": Action.PREVIOUS,
    "n": Action.NEXT,
    "r": Action.RESTART,
}

# Extra bindings for terminals without arrow keys.
WASD_BINDINGS: dict[str, Action] = {
    "a": Action.LEFT,
    "d": Action.RIGHT,
    "w": Action.UP,
    "s": Action.DOWN,
}


def action_for_key(key: str, bindings: Optional[dict[str, Action]] = None) -> Optional[Action]:
    """Looks up a key name (case-insensitive). Unbound keys give ``None``."""
    bindings = KEY_BINDINGS if bindings is None else bindings
    return bindings.get(key.strip().lower())
