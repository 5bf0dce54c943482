"""Tests for the pure, jit-compiled transition rules."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from pushbox.core.cells import DIRECTION_VECTORS, PLAYER_MARKERS, Cell, Direction, MoveResult
from pushbox.engine.rules import PushBoxRules


class TestPushBoxRules:
    def test_instantiation(self, rules4):
        assert rules4.size == 4
        assert rules4.action_size == 4

    def test_default_size(self):
        assert PushBoxRules.size == 20

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            PushBoxRules(size=0)

    def test_get_actions_push(self, rules4, scenario_grid):
        state = rules4.make_state(scenario_grid, (1, 1))
        next_state, code = rules4.get_actions(state, Direction.RIGHT.value)

        assert MoveResult(int(code)) is MoveResult.PUSHED
        board = np.asarray(next_state.board)
        assert board[1, 1] == Cell.FLOOR.value
        assert board[2, 1] == Cell.PLAYER_RIGHT.value
        assert board[3, 1] == Cell.BOX_ON_TARGET.value
        assert np.asarray(next_state.position).tolist() == [2, 1]
        assert int(next_state.covered) == Cell.FLOOR.value

    def test_input_snapshot_is_not_modified(self, rules4, scenario_grid):
        state = rules4.make_state(scenario_grid, (1, 1))
        rules4.get_actions(state, Direction.RIGHT.value)
        assert np.array_equal(np.asarray(state.board), scenario_grid)

    def test_rejected_move_returns_same_values(self, rules4, make_grid):
        grid = make_grid(4, {(0, 0): Cell.PLAYER_DOWN})
        state = rules4.make_state(grid, (0, 0))
        next_state, code = rules4.get_actions(state, Direction.DOWN.value)

        assert MoveResult(int(code)) is MoveResult.OUT_OF_BOUNDS
        assert np.array_equal(np.asarray(next_state.board), grid)
        assert np.asarray(next_state.position).tolist() == [0, 0]

    def test_get_neighbours(self, rules4, scenario_grid):
        state = rules4.make_state(scenario_grid, (1, 1))
        states, codes = rules4.get_neighbours(state)

        assert codes.shape == (rules4.action_size,)
        assert states.board.shape == (rules4.action_size, 4, 4)
        results = [MoveResult(int(c)) for c in codes]
        assert results[Direction.LEFT.value] is MoveResult.MOVED
        assert results[Direction.RIGHT.value] is MoveResult.PUSHED
        assert results[Direction.UP.value] is MoveResult.MOVED
        assert results[Direction.DOWN.value] is MoveResult.MOVED

    def test_batched_get_actions(self, rules4, scenario_grid):
        state = rules4.make_state(scenario_grid, (1, 1))
        states = jax.tree_util.tree_map(lambda x: jnp.stack([x, x]), state)
        actions = jnp.array([Direction.RIGHT.value, Direction.LEFT.value])

        next_states, codes = rules4.batched_get_actions(states, actions)

        assert [MoveResult(int(c)) for c in codes] == [MoveResult.PUSHED, MoveResult.MOVED]
        assert np.asarray(next_states.position).tolist() == [[2, 1], [0, 1]]

    def test_is_solved(self, rules4, scenario_grid):
        state = rules4.make_state(scenario_grid, (1, 1))
        assert not bool(rules4.is_solved(state))
        solved, _ = rules4.get_actions(state, Direction.RIGHT.value)
        assert bool(rules4.is_solved(solved))

    def test_batched_is_solved(self, rules4, scenario_grid):
        state = rules4.make_state(scenario_grid, (1, 1))
        solved, _ = rules4.get_actions(state, Direction.RIGHT.value)
        states = jax.tree_util.tree_map(lambda a, b: jnp.stack([a, b]), state, solved)

        assert np.asarray(rules4.batched_is_solved(states)).tolist() == [False, True]

    def test_direction_tables_match_enum(self):
        assert [list(d.vector) for d in Direction] == np.asarray(DIRECTION_VECTORS).tolist()
        assert [d.marker.value for d in Direction] == np.asarray(PLAYER_MARKERS).tolist()
        assert Direction.RIGHT.marker is Cell.PLAYER_RIGHT
        assert Direction.UP.vector == (0, 1)

    def test_action_strings(self, rules4):
        assert [rules4.action_to_string(d.value) for d in Direction] == ["←", "→", "↑", "↓"]
        with pytest.raises(ValueError):
            rules4.action_to_string(4)

    def test_string_parser(self, rules4, scenario_grid):
        state = rules4.make_state(scenario_grid, (1, 1))
        text = str(state)
        lines = text.split("\n")

        assert len(lines) == rules4.size + 2
        assert lines[0].startswith("┏")
        assert lines[-1].startswith("┗")
        assert "▼" in text
        # y=1 is the third text line of the board (second from the bottom).
        assert "▼" in lines[3]
