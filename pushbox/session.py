from __future__ import annotations

import logging
import queue
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Callable, Optional

from pushbox.config import GameConfig
from pushbox.control.actions import Action
from pushbox.control.gate import InputGate
from pushbox.core.cells import MoveResult
from pushbox.engine.rules import PushBoxRules
from pushbox.engine.sequencer import LevelSequencer, Phase
from pushbox.engine.state import PuzzleState
from pushbox.exceptions import LevelNotFoundError
from pushbox.levels.repository import LevelRepository

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    """What one :meth:`GameSession.tick` did, for the renderer and audio cues."""

    level: int
    phase: Phase
    action: Optional[Action] = None
    result: Optional[MoveResult] = None
    dirty_cells: list[tuple[int, int]] = field(default_factory=list)
    loaded: bool = False
    won: bool = False

    @property
    def moved(self) -> bool:
        """A move or push happened this tick."""
        return self.result is not None and self.result.changed


@dataclass(frozen=True)
class LevelLoaded:
    ticket: int
    level: int
    future: Future


class GameSession:
    """Owns all mutable game state and advances it one tick at a time.

    Inputs go through :meth:`submit` (rate-limited by an :class:`InputGate`);
    :meth:`tick` installs finished level loads, applies at most one action and
    runs the win check. Level loads are requested from the repository as
    futures; their completion is posted to an inbox that only :meth:`tick`
    reads, so state is never touched outside a tick.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        repository: Optional[LevelRepository] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or GameConfig()
        self.config.validate()
        self.repository = repository or LevelRepository(self.config.levels_dir, size=self.config.size)
        level_count = self.config.level_count or self.repository.level_count
        if level_count < 1:
            raise LevelNotFoundError(1, str(self.repository.root))

        self.rules = PushBoxRules(self.config.size)
        self.sequencer = LevelSequencer(self.rules, level_count, self.config.start_level)
        self.gate = InputGate(self.config.input_interval_ms, clock)
        self._inbox: queue.SimpleQueue = queue.SimpleQueue()
        self._ticket = 0
        self._request_load()

    @property
    def level(self) -> int:
        return self.sequencer.current_level

    @property
    def phase(self) -> Phase:
        return self.sequencer.phase

    @property
    def puzzle(self) -> Optional[PuzzleState]:
        return self.sequencer.puzzle

    def submit(self, action: Action, now: Optional[float] = None) -> bool:
        """Offers an input to the gate. Returns False if it was rate-limited."""
        return self.gate.offer(action, now)

    def tick(self) -> TickReport:
        """
        Runs one update.

        Raises:
            MalformedLevelError, LevelNotFoundError: when the requested level
                failed to load. The session stays in ``AWAITING_LOAD`` without
                a pending request until PREVIOUS, NEXT or RESTART asks for a
                level again.
        """
        report = TickReport(level=self.level, phase=self.phase)
        self._drain_inbox(report)

        action = self.gate.take()
        if action is not None:
            report.action = action
            self._dispatch(action, report)

        report.level = self.level
        report.phase = self.phase
        return report

    def _dispatch(self, action: Action, report: TickReport) -> None:
        direction = action.direction
        if direction is not None:
            if not self.sequencer.playing:
                logger.debug("Ignoring %s while waiting for level %d", action.name, self.level)
                return
            puzzle = self.sequencer.puzzle
            puzzle.pending_action = direction
            report.result = puzzle.apply_pending()
            if report.result.changed:
                report.dirty_cells = list(puzzle.dirty_cells)
            if self.sequencer.check_win():
                report.won = True
                self._request_load()
            return

        if action is Action.PREVIOUS:
            self.sequencer.previous_level()
        elif action is Action.NEXT:
            self.sequencer.next_level()
        elif action is Action.RESTART:
            self.sequencer.restart()
        self._request_load()

    def _request_load(self) -> None:
        self._ticket += 1
        ticket, level = self._ticket, self.level
        logger.info("Requesting level %d", level)
        future = self.repository.request(level)
        future.add_done_callback(lambda f: self._inbox.put(LevelLoaded(ticket, level, f)))

    def _drain_inbox(self, report: TickReport) -> None:
        while True:
            try:
                message = self._inbox.get_nowait()
            except queue.Empty:
                return
            if message.ticket != self._ticket:
                logger.warning("Dropping superseded load of level %d", message.level)
                continue
            data = message.future.result()
            self.sequencer.load_complete(data.grid, data.start)
            report.loaded = True
