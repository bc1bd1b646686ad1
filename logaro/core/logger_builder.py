"""Logger builder pattern"""

from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, TextIO

from logaro.core.log_level import Level, level_name
from logaro.core.logger import Logger, generate_root
from logaro.core.logger_config import ErrorHandler, LoggerConfig
from logaro.formatters.base_formatter import BaseFormatter
from logaro.formatters.json_formatter import JSONFormatter
from logaro.writers.file_writer import FileWriter
from logaro.writers.stream_writer import StreamWriter


class LoggerBuilder:
    """
    Builder pattern for root logger construction.

    A tree has exactly one writer; the last with_stream(), with_file() or
    with_writer() call wins.

    Example:
        log = (LoggerBuilder()
            .with_level("debug")
            .with_file("logs/app.jsonl")
            .build())
    """

    def __init__(self, config: Optional[LoggerConfig] = None):
        self._config = replace(config) if config else LoggerConfig()
        self._stream: Optional[TextIO] = None
        self._file_path: Optional[Path] = None
        self._custom_writer: Any = None
        self._formatter: Optional[BaseFormatter] = None

    def with_level(self, level: Level) -> "LoggerBuilder":
        """Set minimum log level of the root."""
        self._config.level = level_name(level)
        return self

    def with_utc(self, enabled: bool = True) -> "LoggerBuilder":
        """Write timestamps in UTC."""
        self._config.utc = enabled
        return self

    def with_stream(self, stream: TextIO) -> "LoggerBuilder":
        """Write JSON lines to a text stream."""
        self._clear_writer()
        self._stream = stream
        return self

    def with_file(self, filepath: str) -> "LoggerBuilder":
        """Append JSON lines to a file."""
        self._clear_writer()
        self._file_path = Path(filepath)
        return self

    def with_writer(self, writer: Any) -> "LoggerBuilder":
        """
        Use a custom writer.

        Args:
            writer: Object with write(entry) that raises on failure

        Returns:
            Self for method chaining
        """
        if not callable(getattr(writer, "write", None)):
            raise TypeError("writer must have a write(entry) method")
        self._clear_writer()
        self._custom_writer = writer
        return self

    def with_formatter(self, formatter: BaseFormatter) -> "LoggerBuilder":
        """
        Set the formatter for stream and file writers.

        Custom writers passed to with_writer() keep their own formatter.
        """
        self._formatter = formatter
        return self

    def with_error_handler(self, handler: ErrorHandler) -> "LoggerBuilder":
        """
        Set the diagnostic channel for failed writes.

        Args:
            handler: Callable taking (error, entry)

        Returns:
            Self for method chaining

        Example:
            failures = []
            log = (LoggerBuilder()
                .with_error_handler(lambda e, entry: failures.append(e))
                .build())
        """
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._config.error_handler = handler
        return self

    def _clear_writer(self) -> None:
        self._stream = None
        self._file_path = None
        self._custom_writer = None

    def build(self) -> Logger:
        """Build and return the root logger."""
        config = replace(self._config)
        formatter = self._formatter or JSONFormatter(
            sort_keys=config.sort_keys,
            ensure_ascii=config.ensure_ascii
        )

        if self._custom_writer is not None:
            writer = self._custom_writer
        elif self._file_path is not None:
            writer = FileWriter(str(self._file_path), formatter=formatter)
        else:
            writer = StreamWriter(self._stream, formatter=formatter)

        return generate_root(writer, config)
