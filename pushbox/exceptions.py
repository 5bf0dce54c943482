from __future__ import annotations


class MalformedLevelError(ValueError):
    """Raised when level data cannot be turned into a valid grid."""

    def __init__(self, message: str, *, source: str = "<level>", row: int | None = None, column: int | None = None):
        self.source = source
        self.row = row
        self.column = column
        location = source
        if row is not None:
            location += f":{row + 1}"
            if column is not None:
                location += f":{column + 1}"
        super().__init__(f"{location}: {message}")


class LevelNotFoundError(LookupError):
    """Raised when no level file exists for a level number."""

    def __init__(self, level: int, where: str):
        self.level = level
        super().__init__(f"Level {level} not found in {where}")
