from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from pushbox.core.cells import PLAYER_CELLS, Cell, Direction, MoveResult
from pushbox.engine.rules import PushBoxRules

logger = logging.getLogger(__name__)

_PLAYER_VALUES = np.array([c.value for c in PLAYER_CELLS])


class PuzzleState:
    """Mutable puzzle state owned by a single update tick.

    Wraps the current immutable board snapshot and replaces it with the
    successor computed by :class:`PushBoxRules` on every accepted step.

    Attributes:
        rules: The transition rules (also fixes the grid size).
        pending_action: Direction queued for the next :meth:`apply_pending` call.
        needs_redraw: Set whenever a step changes the grid; cleared by
            :meth:`consume_redraw`.
        dirty_cells: Coordinates rewritten by the most recent successful step.
    """

    def __init__(self, rules: PushBoxRules, snapshot: PushBoxRules.State) -> None:
        self.rules = rules
        self.snapshot = snapshot
        self.pending_action: Optional[Direction] = None
        self.needs_redraw: bool = True
        self.dirty_cells: list[tuple[int, int]] = []
        self._validate()

    @classmethod
    def from_grid(
        cls,
        rules: PushBoxRules,
        grid,
        position: tuple[int, int],
        covered: Cell = Cell.FLOOR,
    ) -> "PuzzleState":
        return cls(rules, rules.make_state(grid, position, covered))

    @property
    def grid(self) -> np.ndarray:
        """Host copy of the grid, indexed ``grid[x, y]``."""
        return np.asarray(self.snapshot.board)

    @property
    def position(self) -> tuple[int, int]:
        x, y = np.asarray(self.snapshot.position).tolist()
        return x, y

    @property
    def covered_type(self) -> Cell:
        return Cell(int(self.snapshot.covered))

    @property
    def size(self) -> int:
        return self.rules.size

    def cell(self, x: int, y: int) -> Cell:
        return Cell(int(self.snapshot.board[x, y]))

    def step(self, direction: Direction) -> MoveResult:
        """Moves the player one cell, pushing a box if one is in the way.

        Illegal moves leave the state untouched and report ``BLOCKED`` or
        ``OUT_OF_BOUNDS``; nothing is raised.
        """
        origin = self.position
        next_snapshot, code = self.rules.get_actions(self.snapshot, direction.value)
        result = MoveResult(int(code))
        if not result.changed:
            self.dirty_cells = []
            logger.debug("%s from %s rejected: %s", direction.name, origin, result.name)
            return result

        self.snapshot = next_snapshot
        dx, dy = direction.vector
        self.dirty_cells = [origin, (origin[0] + dx, origin[1] + dy)]
        if result is MoveResult.PUSHED:
            self.dirty_cells.append((origin[0] + 2 * dx, origin[1] + 2 * dy))
        self.needs_redraw = True
        logger.debug("%s from %s: %s", direction.name, origin, result.name)
        return result

    def apply_pending(self) -> Optional[MoveResult]:
        """Applies and clears the queued direction, if any."""
        direction, self.pending_action = self.pending_action, None
        if direction is None:
            return None
        return self.step(direction)

    def consume_redraw(self) -> bool:
        flag, self.needs_redraw = self.needs_redraw, False
        return flag

    def win_check(self) -> bool:
        """True when no plain box remains on the grid. Does not mutate anything."""
        return bool(self.rules.is_solved(self.snapshot))

    def available_moves(self) -> list[Direction]:
        """Directions that would move the player (with or without a push)."""
        _, codes = self.rules.get_neighbours(self.snapshot)
        return [d for d in Direction if MoveResult(int(codes[d.value])).changed]

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self.grid == cell.value))

    def _validate(self) -> None:
        x, y = self.position
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise ValueError(f"Player position {(x, y)} is outside the {self.size}x{self.size} grid")
        if not self.cell(x, y).is_player:
            raise ValueError(f"Cell {(x, y)} holds {self.cell(x, y).name}, expected a player marker")
        markers = int(np.isin(self.grid, _PLAYER_VALUES).sum())
        if markers != 1:
            raise ValueError(f"Grid must contain exactly one player marker, found {markers}")
        if not self.covered_type.is_walkable:
            raise ValueError(f"Covered cell must be FLOOR or TARGET, got {self.covered_type.name}")

    def __str__(self) -> str:
        return str(self.snapshot)
