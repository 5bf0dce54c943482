"""
Level files: parsing ``.map`` text and serving levels by number.
"""

from pushbox.levels.parser import LevelData, parse_level
from pushbox.levels.repository import LevelRepository

__all__ = [
    "LevelData",
    "LevelRepository",
    "parse_level",
]
