import jax.numpy as jnp
import pytest

from pushbox.core.cells import TYPE, Cell
from pushbox.engine.rules import PushBoxRules


def test_rules_snapshot_fields(rules4, scenario_grid):
    state = rules4.make_state(scenario_grid, (1, 1), Cell.TARGET)
    assert isinstance(state, rules4.State)
    assert state.board.shape == (4, 4)
    assert state.board.dtype == TYPE
    assert state.position.dtype == jnp.int32
    assert int(state.covered) == Cell.TARGET.value


def test_snapshot_classes_are_per_size(rules4):
    other = PushBoxRules(size=3)
    assert other.State is not rules4.State
    assert other.make_state(jnp.full((3, 3), Cell.FLOOR.value), (0, 0)).board.shape == (3, 3)


def test_make_state_rejects_wrong_shape(rules4):
    with pytest.raises(ValueError, match="does not match grid size"):
        rules4.make_state(jnp.zeros((3, 3)), (0, 0))
