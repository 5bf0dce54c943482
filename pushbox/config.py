from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from pushbox.control.gate import INPUT_INTERVAL_MS
from pushbox.engine.rules import MAP_SIZE

logger = logging.getLogger(__name__)

ENV_PREFIX = "PUSHBOX_"


def _optional_int(value: str) -> Optional[int]:
    value = value.strip()
    return int(value) if value else None


def _optional_str(value: str) -> Optional[str]:
    value = value.strip()
    return value or None


_ENV_FIELDS = {
    "SIZE": ("size", int),
    "LEVEL_COUNT": ("level_count", _optional_int),
    "INPUT_INTERVAL_MS": ("input_interval_ms", float),
    "LEVELS_DIR": ("levels_dir", _optional_str),
    "START_LEVEL": ("start_level", int),
}


@dataclass
class GameConfig:
    """Runtime settings for a game session.

    Attributes:
        size: Side length of the square grid.
        level_count: Number of levels before wrapping. ``None`` uses however
            many consecutive levels the level source holds.
        input_interval_ms: Minimum time between accepted actions.
        levels_dir: Directory of ``<n>.map`` files; ``None`` uses the packaged levels.
        start_level: Level loaded first.
    """

    size: int = MAP_SIZE
    level_count: Optional[int] = None
    input_interval_ms: float = INPUT_INTERVAL_MS
    levels_dir: Optional[str] = None
    start_level: int = 1

    def validate(self) -> None:
        if self.size < 1:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.level_count is not None and self.level_count < 1:
            raise ValueError(f"level_count must be at least 1, got {self.level_count}")
        if self.input_interval_ms < 0:
            raise ValueError(f"input_interval_ms must be non-negative, got {self.input_interval_ms}")
        if self.start_level < 1:
            raise ValueError(f"start_level must be at least 1, got {self.start_level}")
        if self.level_count is not None and self.start_level > self.level_count:
            raise ValueError(
                f"start_level {self.start_level} is past level_count {self.level_count}"
            )

    def replace(self, **overrides: Any) -> "GameConfig":
        """Copy with the non-``None`` overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        config = dataclasses.replace(self, **changes)
        config.validate()
        return config

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        allowed = {f.name for f in dataclasses.fields(cls)}
        config = cls(**{k: v for k, v in data.items() if k in allowed})
        config.validate()
        return config

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GameConfig":
        """Builds a config from ``PUSHBOX_*`` environment variables."""
        env = os.environ if env is None else env
        values: Dict[str, Any] = {}
        for suffix, (name, convert) in _ENV_FIELDS.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw is None:
                continue
            try:
                values[name] = convert(raw)
            except ValueError as e:
                raise ValueError(f"Invalid {ENV_PREFIX + suffix}={raw!r}: {e}") from e
        if values:
            logger.debug("Config overrides from environment: %s", values)
        return cls.from_dict(values)
