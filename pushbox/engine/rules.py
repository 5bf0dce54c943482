import chex
import jax
import jax.numpy as jnp
import numpy as np
from termcolor import colored
from xtructure import FieldDescriptor, xtructure_dataclass

from pushbox.core.cells import (
    DIRECTION_VECTORS,
    PLAYER_MARKERS,
    TYPE,
    Cell,
    MoveResult,
)

MAP_SIZE = 20

_FLOOR = Cell.FLOOR.value
_TARGET = Cell.TARGET.value
_BOX = Cell.BOX.value
_BOX_ON_TARGET = Cell.BOX_ON_TARGET.value


class PushBoxRules:
    """Pure, jit-compiled transition rules for an N×N push-box grid.

    Boards are indexed ``board[x, y]`` with ``y == 0`` the bottom row. Every
    method takes and returns immutable snapshots (``PushBoxRules.State``);
    nothing here mutates its input.

    Attributes:
        size: Side length N of the square grid.
        action_size: Number of directions (always 4).
        State: The xtructure snapshot class built in ``__init__``.
    """

    size: int = MAP_SIZE
    action_size: int = 4

    def __init__(self, size: int = MAP_SIZE):
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.State = self.define_state_class()

        self.get_actions = jax.jit(self.get_actions)
        self.batched_get_actions = jax.jit(self.batched_get_actions)
        self.get_neighbours = jax.jit(self.get_neighbours)
        self.is_solved = jax.jit(self.is_solved)
        self.batched_is_solved = jax.jit(self.batched_is_solved)

    def define_state_class(self) -> type:
        """Defines the board snapshot class using xtructure."""
        str_parser = self.get_string_parser()
        size = self.size

        @xtructure_dataclass
        class State:
            board: FieldDescriptor[TYPE, (size, size)]
            position: FieldDescriptor[jnp.int32, (2,)]
            covered: FieldDescriptor[TYPE]

            def __str__(self, **kwargs):
                return str_parser(self, **kwargs)

        return State

    def make_state(self, board, position, covered: Cell = Cell.FLOOR) -> "PushBoxRules.State":
        """Builds a snapshot from a host-side grid, a start position and the covered cell."""
        board = jnp.asarray(board, dtype=TYPE)
        if board.shape != (self.size, self.size):
            raise ValueError(
                f"Board shape {board.shape} does not match grid size {self.size}x{self.size}"
            )
        return self.State(
            board=board,
            position=jnp.asarray(position, dtype=jnp.int32),
            covered=jnp.asarray(covered.value, dtype=TYPE),
        )

    def get_actions(
        self, state: "PushBoxRules.State", action: chex.Array
    ) -> tuple["PushBoxRules.State", chex.Array]:
        """
        Applies one direction to a snapshot.
        Returns the successor snapshot and a ``MoveResult`` value. Blocked and
        out-of-bounds moves return the input snapshot unchanged.
        """
        board = state.board
        position = state.position
        delta = DIRECTION_VECTORS[action]
        marker = PLAYER_MARKERS[action]
        next_pos = position + delta
        push_pos = next_pos + delta

        def is_valid_pos(pos):
            return jnp.all(jnp.logical_and(pos >= 0, pos < self.size))

        def cell_at(pos):
            pos = jnp.clip(pos, 0, self.size - 1)
            return board[pos[0], pos[1]]

        def put(b, pos, flag, value):
            # Writes are masked so a rejected move leaves every cell untouched.
            pos = jnp.clip(pos, 0, self.size - 1)
            current = b[pos[0], pos[1]]
            return b.at[pos[0], pos[1]].set(jnp.where(flag, value, current).astype(TYPE))

        def is_walkable(cell):
            return jnp.logical_or(cell == _FLOOR, cell == _TARGET)

        def is_box(cell):
            return jnp.logical_or(cell == _BOX, cell == _BOX_ON_TARGET)

        next_valid = is_valid_pos(next_pos)
        push_valid = is_valid_pos(push_pos)
        target = cell_at(next_pos)
        beyond = cell_at(push_pos)

        walk = jnp.logical_and(next_valid, is_walkable(target))
        box_ahead = jnp.logical_and(next_valid, is_box(target))
        push = jnp.logical_and(box_ahead, jnp.logical_and(push_valid, is_walkable(beyond)))
        moved = jnp.logical_or(walk, push)

        result = jnp.select(
            [
                walk,
                push,
                jnp.logical_not(next_valid),
                jnp.logical_and(box_ahead, jnp.logical_not(push_valid)),
            ],
            [
                jnp.int32(MoveResult.MOVED.value),
                jnp.int32(MoveResult.PUSHED.value),
                jnp.int32(MoveResult.OUT_OF_BOUNDS.value),
                jnp.int32(MoveResult.OUT_OF_BOUNDS.value),
            ],
            default=jnp.int32(MoveResult.BLOCKED.value),
        ).astype(jnp.int32)

        new_board = put(board, position, moved, state.covered)
        new_board = put(new_board, next_pos, moved, marker)
        new_board = put(
            new_board,
            push_pos,
            push,
            jnp.where(beyond == _TARGET, _BOX_ON_TARGET, _BOX),
        )

        # A pushed box leaves behind the surface it was resting on.
        left_behind = jnp.where(target == _BOX_ON_TARGET, _TARGET, _FLOOR)
        new_covered = jnp.where(walk, target, jnp.where(push, left_behind, state.covered))
        new_position = jnp.where(moved, next_pos, position)

        next_state = self.State(
            board=new_board,
            position=new_position.astype(jnp.int32),
            covered=new_covered.astype(TYPE),
        )
        return next_state, result

    def batched_get_actions(
        self, states: "PushBoxRules.State", actions: chex.Array
    ) -> tuple["PushBoxRules.State", chex.Array]:
        """Vectorised version of :meth:`get_actions` over a leading batch axis."""
        return jax.vmap(self.get_actions, in_axes=(0, 0))(states, actions)

    def get_neighbours(
        self, state: "PushBoxRules.State"
    ) -> tuple["PushBoxRules.State", chex.Array]:
        """
        Returns the successor snapshot and result code for every direction,
        stacked along a leading axis of length ``action_size``.
        """
        actions = jnp.arange(self.action_size)
        return jax.vmap(self.get_actions, in_axes=(None, 0))(state, actions)

    def is_solved(self, state: "PushBoxRules.State") -> chex.Array:
        # Won when no plain box is left; boxes on targets do not count.
        return jnp.logical_not(jnp.any(state.board == _BOX))

    def batched_is_solved(self, states: "PushBoxRules.State") -> chex.Array:
        return jax.vmap(self.is_solved)(states)

    def action_to_string(self, action: int) -> str:
        """
        This function should return a string representation of the action.
        """
        match action:
            case 0:
                return "←"
            case 1:
                return "→"
            case 2:
                return "↑"
            case 3:
                return "↓"
            case _:
                raise ValueError(f"Invalid action: {action}")

    def get_string_parser(self):
        form = self._get_visualize_format()

        def to_char(x):
            match x:
                case Cell.BLANK.value:
                    return " "
                case Cell.WALL.value:
                    return colored("■", "white")
                case Cell.FLOOR.value:
                    return "·"
                case Cell.BOX.value:
                    return colored("■", "yellow")
                case Cell.TARGET.value:
                    return colored("x", "red")
                case Cell.BOX_ON_TARGET.value:
                    return colored("■", "green")
                case Cell.PLAYER_DOWN.value:
                    return colored("▼", "cyan")
                case Cell.PLAYER_RIGHT.value:
                    return colored("▶", "cyan")
                case Cell.PLAYER_LEFT.value:
                    return colored("◀", "cyan")
                case Cell.PLAYER_UP.value:
                    return colored("▲", "cyan")
                case _:
                    return "?"

        def parser(state: "PushBoxRules.State", **kwargs):
            board = np.asarray(state.board)
            # Top text row is the highest y.
            cells = [int(board[x, y]) for y in range(self.size - 1, -1, -1) for x in range(self.size)]
            return form.format(*map(to_char, cells))

        return parser

    def _get_visualize_format(self):
        size = self.size
        top_border = "┏━" + "━━" * size + "┓\n"
        middle = ""
        for _ in range(size):
            middle += "┃ " + " ".join(["{:s}"] * size) + " ┃\n"
        bottom_border = "┗━" + "━━" * size + "┛"
        return top_border + middle + bottom_border

