"""
Log level enumeration and severity filtering

Levels travel through the logger as plain strings. Severity lookup is an
exact-name match against a fixed table; names missing from the table rank
as severity 0.
"""

from enum import IntEnum
from typing import Dict, Union


class LogLevel(IntEnum):
    """
    Log level enumeration.

    Values are the severities used for filtering.
    """

    DEBUG = 1   # Debug information
    INFO = 2    # Informational messages
    WARN = 3    # Warning messages
    ERROR = 4   # Error messages
    FATAL = 5   # Fatal errors (logged only, the process keeps running)

    def __str__(self) -> str:
        """Wire name of the level."""
        return self.name.lower()

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """
        Convert string to LogLevel.

        Args:
            level_str: Level name (case-insensitive)

        Returns:
            LogLevel enum value

        Raises:
            ValueError: If level_str is not valid
        """
        level_str = level_str.upper()
        if level_str in cls.__members__:
            return cls[level_str]
        raise ValueError(f"Invalid log level: {level_str}")


# Severity table keyed by wire name
SEVERITIES: Dict[str, int] = {str(level): int(level) for level in LogLevel}

# Severity of any name missing from SEVERITIES
UNKNOWN_SEVERITY = 0

Level = Union[LogLevel, str]


def level_name(level: Level) -> str:
    """Normalize a LogLevel or a level string to the string stored on entries."""
    if isinstance(level, LogLevel):
        return str(level)
    if not isinstance(level, str):
        raise TypeError(f"level must be a str or LogLevel, not {type(level).__name__}")
    return level


def severity(level: Level) -> int:
    """
    Get the severity of a level.

    Lookup is case-sensitive. Unknown names rank as UNKNOWN_SEVERITY, so an
    unknown candidate never passes a known threshold and an unknown
    threshold lets every level through.

    Args:
        level: LogLevel or level name

    Returns:
        Severity between 0 and 5
    """
    if isinstance(level, LogLevel):
        return int(level)
    return SEVERITIES.get(level, UNKNOWN_SEVERITY)


def is_enabled(configured: Level, candidate: Level) -> bool:
    """Check whether candidate is at or above the configured threshold."""
    return severity(candidate) >= severity(configured)
