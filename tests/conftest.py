import numpy as np
import pytest

from pushbox.core.cells import Cell
from pushbox.engine.rules import PushBoxRules
from pushbox.engine.state import PuzzleState

# 4x4 room: player (1,1) facing down, box (2,1), target (3,1), floor elsewhere.
LEVEL_ONE_4X4 = "2222\n2222\n2534\n2222\n"
# Player (1,2), box (2,1), target (2,0): RIGHT then DOWN solves it.
LEVEL_TWO_4X4 = "2222\n2522\n2232\n2242\n"


def _make_grid(size: int, cells: dict, fill: Cell = Cell.FLOOR) -> np.ndarray:
    """Builds a ``grid[x, y]`` array filled with ``fill`` and the given overrides."""
    grid = np.full((size, size), fill.value, dtype=np.uint8)
    for (x, y), cell in cells.items():
        grid[x, y] = cell.value
    return grid


@pytest.fixture
def make_grid():
    return _make_grid


@pytest.fixture(scope="session")
def rules4():
    return PushBoxRules(size=4)


@pytest.fixture
def scenario_grid():
    return _make_grid(
        4,
        {
            (1, 1): Cell.PLAYER_DOWN,
            (2, 1): Cell.BOX,
            (3, 1): Cell.TARGET,
        },
    )


@pytest.fixture
def scenario(rules4, scenario_grid):
    return PuzzleState.from_grid(rules4, scenario_grid, (1, 1))


@pytest.fixture
def levels_dir(tmp_path):
    (tmp_path / "1.map").write_text(LEVEL_ONE_4X4)
    (tmp_path / "2.map").write_text(LEVEL_TWO_4X4)
    return tmp_path
