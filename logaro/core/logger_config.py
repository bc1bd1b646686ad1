"""
Logger configuration management
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from logaro.core.log_level import LogLevel, level_name

if TYPE_CHECKING:
    from logaro.core.log_entry import LogEntry

ErrorHandler = Callable[[Exception, Optional["LogEntry"]], None]


def report_to_stderr(error: Exception, entry: Optional["LogEntry"] = None) -> None:
    """Default diagnostic channel: one line on stderr per failed write."""
    print(f"Error encoding log entry: {error}", file=sys.stderr)


@dataclass
class LoggerConfig:
    """
    Logger configuration.

    Shared by every logger of a tree. The level is only the starting
    level of the root; each logger keeps its own copy afterwards.
    """

    # Basic settings
    level: str = "info"

    # Timestamp settings
    utc: bool = False

    # Default formatter settings
    sort_keys: bool = True
    ensure_ascii: bool = False

    # Diagnostic channel for failed writes
    error_handler: ErrorHandler = field(default=report_to_stderr)

    def __post_init__(self):
        """Validate configuration after initialization."""
        # Convert LogLevel to its wire name
        self.level = level_name(self.level)
        if not callable(self.error_handler):
            raise TypeError("error_handler must be callable")

    @classmethod
    def default(cls) -> "LoggerConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def debug_config(cls) -> "LoggerConfig":
        """Create configuration for debugging."""
        return cls(level=str(LogLevel.DEBUG))

    @classmethod
    def production_config(cls) -> "LoggerConfig":
        """Create configuration for production."""
        return cls(
            level=str(LogLevel.WARN),
            utc=True,
        )
