"""
PushBox: a push-box (Sokoban-style) puzzle engine on JAX

Provides the grid model, the move/push rule, the win check and level
sequencing, plus level loading, input rate limiting and a terminal front end.
"""

from pushbox.config import GameConfig
from pushbox.control import Action, InputGate
from pushbox.core import Cell, Direction, MoveResult
from pushbox.engine import LEVEL_COUNT, MAP_SIZE, LevelSequencer, Phase, PushBoxRules, PuzzleState
from pushbox.exceptions import LevelNotFoundError, MalformedLevelError
from pushbox.levels import LevelData, LevelRepository, parse_level
from pushbox.session import GameSession, TickReport

__version__ = "0.1.0"

__all__ = [
    # Core
    "Cell",
    "Direction",
    "MoveResult",
    # Engine
    "PushBoxRules",
    "PuzzleState",
    "LevelSequencer",
    "Phase",
    "MAP_SIZE",
    "LEVEL_COUNT",
    # Levels
    "LevelData",
    "LevelRepository",
    "parse_level",
    "MalformedLevelError",
    "LevelNotFoundError",
    # Session
    "Action",
    "InputGate",
    "GameConfig",
    "GameSession",
    "TickReport",
]
