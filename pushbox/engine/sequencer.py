from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from pushbox.core.cells import Cell
from pushbox.engine.rules import PushBoxRules
from pushbox.engine.state import PuzzleState

logger = logging.getLogger(__name__)

LEVEL_COUNT = 50


class Phase(Enum):
    AWAITING_LOAD = 0
    PLAYING = 1


class LevelSequencer:
    """Tracks the current level and the load/play lifecycle.

    ``AWAITING_LOAD --load_complete--> PLAYING --win--> AWAITING_LOAD`` with the
    level incremented (wrapping to 1 after ``level_count``). While waiting for a
    load there is no puzzle; a load that has not arrived yet is not an error.
    """

    def __init__(
        self,
        rules: Optional[PushBoxRules] = None,
        level_count: int = LEVEL_COUNT,
        start_level: int = 1,
    ) -> None:
        if level_count < 1:
            raise ValueError(f"level_count must be at least 1, got {level_count}")
        if not 1 <= start_level <= level_count:
            raise ValueError(f"start_level must be in [1, {level_count}], got {start_level}")
        self.rules = rules or PushBoxRules()
        self.level_count = level_count
        self.current_level = start_level
        self.phase = Phase.AWAITING_LOAD
        self.puzzle: Optional[PuzzleState] = None

    @property
    def playing(self) -> bool:
        return self.phase is Phase.PLAYING

    def load_complete(self, grid, start_position: tuple[int, int]) -> PuzzleState:
        """Installs a freshly loaded level and starts playing it.

        The start cell always covers FLOOR: level files carry no information
        about what lies beneath the start marker.
        """
        if self.phase is not Phase.AWAITING_LOAD:
            raise RuntimeError(f"load_complete() called in phase {self.phase.name}")
        self.puzzle = PuzzleState.from_grid(self.rules, grid, start_position, Cell.FLOOR)
        self.phase = Phase.PLAYING
        logger.info("Level %d loaded, player at %s", self.current_level, start_position)
        return self.puzzle

    def check_win(self) -> bool:
        """Runs the win check and advances the level when it passes."""
        if not self.playing:
            return False
        if not self.puzzle.win_check():
            return False
        logger.info("Level %d solved", self.current_level)
        self.advance_on_win()
        return True

    def advance_on_win(self) -> int:
        if self.phase is not Phase.PLAYING:
            raise RuntimeError(f"advance_on_win() called in phase {self.phase.name}")
        return self._goto(self._wrap(self.current_level + 1))

    def next_level(self) -> int:
        return self._goto(self._wrap(self.current_level + 1))

    def previous_level(self) -> int:
        return self._goto(self._wrap(self.current_level - 1))

    def restart(self) -> int:
        return self._goto(self.current_level)

    def _wrap(self, level: int) -> int:
        return (level - 1) % self.level_count + 1

    def _goto(self, level: int) -> int:
        if level != self.current_level:
            logger.info("Level %d -> %d", self.current_level, level)
        self.current_level = level
        self.phase = Phase.AWAITING_LOAD
        self.puzzle = None
        return level
