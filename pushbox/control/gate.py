from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from pushbox.control.actions import Action

logger = logging.getLogger(__name__)

INPUT_INTERVAL_MS = 200.0
_EPSILON_MS = 1e-6


class InputGate:
    """Rate limiter in front of the puzzle: at most one action per interval.

    The window restarts only when an action is accepted, so a held key or a
    burst of clicks inside one window yields a single action. The first
    action is accepted immediately.
    """

    def __init__(
        self,
        interval_ms: float = INPUT_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_ms < 0:
            raise ValueError(f"interval_ms must be non-negative, got {interval_ms}")
        self.interval_ms = interval_ms
        self.clock = clock
        self._last_accepted: Optional[float] = None
        self._pending: Optional[Action] = None

    def ready(self, now: Optional[float] = None) -> bool:
        if self._last_accepted is None:
            return True
        now = self.clock() if now is None else now
        # Tolerate float rounding in the elapsed time.
        return (now - self._last_accepted) * 1000.0 >= self.interval_ms - _EPSILON_MS

    def offer(self, action: Action, now: Optional[float] = None) -> bool:
        """Queues ``action`` if the window is open. Returns whether it was accepted."""
        now = self.clock() if now is None else now
        if not self.ready(now):
            logger.debug("Dropped %s inside the %.0f ms window", action.name, self.interval_ms)
            return False
        self._last_accepted = now
        self._pending = action
        return True

    def take(self) -> Optional[Action]:
        """Returns and clears the accepted action."""
        action, self._pending = self._pending, None
        return action
