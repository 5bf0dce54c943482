from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from pushbox.core.cells import Cell
from pushbox.engine.rules import MAP_SIZE
from pushbox.exceptions import MalformedLevelError

_DIGITS = "0123456789"


@dataclass(frozen=True)
class LevelData:
    """A parsed level: the grid (indexed ``grid[x, y]``) and the player's start cell."""

    grid: np.ndarray
    start: tuple[int, int]

    @property
    def size(self) -> int:
        return self.grid.shape[0]

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self.grid == cell.value))

    @property
    def boxes(self) -> int:
        """All boxes, on a target or not."""
        return self.count(Cell.BOX) + self.count(Cell.BOX_ON_TARGET)

    @property
    def targets(self) -> int:
        return self.count(Cell.TARGET) + self.count(Cell.BOX_ON_TARGET)

    @property
    def is_winnable(self) -> bool:
        # Every loose box needs a free target; the start cell never hides one.
        return self.count(Cell.BOX) <= self.count(Cell.TARGET)


def parse_level(text: str, size: int = MAP_SIZE, source: str = "<level>") -> LevelData:
    """
    Parses level text into a grid.

    The text holds ``size`` rows of ``size`` digits (see :class:`Cell`). The
    first text row is the top of the screen, so text row ``i`` lands at
    ``y = size - 1 - i``. The single ``PLAYER_DOWN`` digit marks the start.

    Raises:
        MalformedLevelError: on a bad character, a row of the wrong width,
            the wrong row count, or a missing/duplicate/mis-facing start marker.
    """
    rows = text.replace("\r\n", "\n").split("\n")
    while rows and not rows[-1].strip():
        rows.pop()
    if len(rows) != size:
        raise MalformedLevelError(f"expected {size} rows, found {len(rows)}", source=source)

    grid = np.zeros((size, size), dtype=np.uint8)
    start = None
    for i, row in enumerate(rows):
        if len(row) != size:
            raise MalformedLevelError(
                f"expected {size} cells, found {len(row)}", source=source, row=i
            )
        y = size - 1 - i
        for j, ch in enumerate(row):
            if ch not in _DIGITS:
                raise MalformedLevelError(f"invalid cell {ch!r}", source=source, row=i, column=j)
            cell = Cell(int(ch))
            if cell.is_player:
                if cell is not Cell.PLAYER_DOWN:
                    raise MalformedLevelError(
                        f"start marker must be {Cell.PLAYER_DOWN.value}, found {ch}",
                        source=source,
                        row=i,
                        column=j,
                    )
                if start is not None:
                    raise MalformedLevelError("more than one start marker", source=source, row=i, column=j)
                start = (j, y)
            grid[j, y] = cell.value

    if start is None:
        raise MalformedLevelError("no start marker", source=source)
    return LevelData(grid=grid, start=start)
