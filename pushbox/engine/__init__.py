"""
Puzzle engine: jit-compiled transition rules, the mutable puzzle state and the
level sequencer.
"""

from pushbox.engine.rules import MAP_SIZE, PushBoxRules
from pushbox.engine.sequencer import LEVEL_COUNT, LevelSequencer, Phase
from pushbox.engine.state import PuzzleState

__all__ = [
    "MAP_SIZE",
    "LEVEL_COUNT",
    "PushBoxRules",
    "PuzzleState",
    "LevelSequencer",
    "Phase",
]
