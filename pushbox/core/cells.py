from enum import Enum

import jax.numpy as jnp

TYPE = jnp.uint8


class Cell(Enum):
    """Grid cell classification. Values are the digits used in level files."""

    BLANK = 0
    WALL = 1
    FLOOR = 2
    BOX = 3
    TARGET = 4
    PLAYER_DOWN = 5
    PLAYER_RIGHT = 6
    PLAYER_LEFT = 7
    PLAYER_UP = 8
    BOX_ON_TARGET = 9

    @property
    def is_player(self) -> bool:
        return self in PLAYER_CELLS

    @property
    def is_walkable(self) -> bool:
        return self in (Cell.FLOOR, Cell.TARGET)


PLAYER_CELLS = (Cell.PLAYER_DOWN, Cell.PLAYER_RIGHT, Cell.PLAYER_LEFT, Cell.PLAYER_UP)


class Direction(Enum):
    """The four movement directions. Values index the lookup tables below."""

    LEFT = 0
    RIGHT = 1
    UP = 2
    DOWN = 3

    @property
    def vector(self) -> tuple[int, int]:
        return _VECTORS[self.value]

    @property
    def marker(self) -> Cell:
        return _MARKERS[self.value]


class MoveResult(Enum):
    MOVED = 0
    PUSHED = 1
    BLOCKED = 2
    OUT_OF_BOUNDS = 3

    @property
    def changed(self) -> bool:
        """True when the step altered the grid."""
        return self in (MoveResult.MOVED, MoveResult.PUSHED)


# x grows to the right, y grows upwards (row 0 is the bottom of the screen).
_VECTORS = ((-1, 0), (1, 0), (0, 1), (0, -1))
_MARKERS = (Cell.PLAYER_LEFT, Cell.PLAYER_RIGHT, Cell.PLAYER_UP, Cell.PLAYER_DOWN)

DIRECTION_VECTORS = jnp.array(_VECTORS, dtype=jnp.int32)
PLAYER_MARKERS = jnp.array([m.value for m in _MARKERS], dtype=TYPE)
