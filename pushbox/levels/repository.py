from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, Future
from importlib.resources import files
from pathlib import Path
from typing import Optional

from pushbox.engine.rules import MAP_SIZE
from pushbox.exceptions import LevelNotFoundError, MalformedLevelError
from pushbox.levels.parser import LevelData, parse_level

logger = logging.getLogger(__name__)

LEVEL_SUFFIX = ".map"


def _packaged_levels():
    try:
        # Package resources first (installed packages)
        return files("pushbox") / "data" / "levels"
    except (FileNotFoundError, ModuleNotFoundError):
        # Fallback to the source tree
        current_dir = os.path.dirname(os.path.abspath(__file__))
        return Path(current_dir, "..", "data", "levels")


class LevelRepository:
    """Reads ``<n>.map`` level files from a directory or the packaged levels.

    :meth:`request` hands levels out as :class:`concurrent.futures.Future`
    objects. Without an executor the future is already resolved; with one the
    file is read and parsed on the executor.
    """

    def __init__(
        self,
        directory: Optional[str | os.PathLike] = None,
        size: int = MAP_SIZE,
        executor: Optional[Executor] = None,
    ) -> None:
        self.root = Path(directory) if directory is not None else _packaged_levels()
        self.size = size
        self.executor = executor

    def path_for(self, level: int):
        return self.root.joinpath(f"{level}{LEVEL_SUFFIX}")

    def has_level(self, level: int) -> bool:
        return level >= 1 and self.path_for(level).is_file()

    @property
    def level_count(self) -> int:
        """Number of consecutive levels available starting at 1."""
        count = 0
        while self.has_level(count + 1):
            count += 1
        return count

    def read_text(self, level: int) -> str:
        if not self.has_level(level):
            raise LevelNotFoundError(level, str(self.root))
        try:
            return self.path_for(level).read_bytes().decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedLevelError(f"not UTF-8 text ({e.reason})", source=f"{level}{LEVEL_SUFFIX}") from e

    def load(self, level: int) -> LevelData:
        data = parse_level(self.read_text(level), self.size, source=f"{level}{LEVEL_SUFFIX}")
        logger.debug("Parsed level %d (start=%s, boxes=%d)", level, data.start, data.boxes)
        return data

    def request(self, level: int) -> Future:
        """Returns a future resolving to the level's :class:`LevelData`."""
        if self.executor is not None:
            return self.executor.submit(self.load, level)
        future: Future = Future()
        try:
            future.set_result(self.load(level))
        except (LevelNotFoundError, MalformedLevelError) as e:
            future.set_exception(e)
        return future
