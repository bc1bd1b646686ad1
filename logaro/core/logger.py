"""
Hierarchical structured logger

Loggers form a tree. Each node carries fixed fields that its log calls and
its descendants inherit, an optional serializer and a writer.
"""

from __future__ import annotations

import threading
import weakref
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from logaro.core.field_merger import context_fields, merge_fields
from logaro.core.log_entry import LogEntry, now_timestamp
from logaro.core.log_level import Level, LogLevel, is_enabled, level_name
from logaro.core.logger_config import LoggerConfig
from logaro.core.serializers import Serializer, composite_serializer, serialize_entry
from logaro.formatters.json_formatter import JSONFormatter
from logaro.writers.stream_writer import StreamWriter


def generate_root(writer: Any = None, config: Optional[LoggerConfig] = None) -> "Logger":
    """
    Create the root logger of a new tree.

    Args:
        writer: Sink with write(entry) (default: JSON lines on stdout)
        config: Tree configuration (default: LoggerConfig.default())

    Returns:
        Root logger with no fields and no serializer

    Example:
        log = generate_root()
        request_log = log.child({"request_id": "42"})
        request_log.info("started", {"path": "/"})
    """
    config = config or LoggerConfig.default()
    if writer is None:
        writer = StreamWriter(formatter=_default_formatter(config))
    return Logger(writer=writer, config=config)


def _default_formatter(config: LoggerConfig) -> JSONFormatter:
    return JSONFormatter(sort_keys=config.sort_keys, ensure_ascii=config.ensure_ascii)


class Logger:
    """
    A node of the logger tree.

    Use generate_root() for the root and child(), with_fields() or
    with_serializers() for everything below it.

    Thread Safety:
        Log calls may run concurrently. Level, fields and serializer are
        read without locks; children appends take the node's lock.
    """

    def __init__(
        self,
        writer: Any,
        config: Optional[LoggerConfig] = None,
        level: Optional[Level] = None,
        parent: Optional["Logger"] = None,
        fields: Optional[Mapping[str, Any]] = None,
        serializer: Optional[Serializer] = None
    ):
        self._config = config or LoggerConfig.default()
        self._level = level_name(level if level is not None else self._config.level)
        self._writer = writer
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._children = []
        self._event_fields = MappingProxyType(dict(fields or {}))
        self._serializer = serializer
        self._context_fields = None
        self._lock = threading.Lock()

    @property
    def level(self) -> str:
        """Configured minimum level."""
        return self._level

    @level.setter
    def level(self, level: Level) -> None:
        # Children created earlier keep their own level
        self._level = level_name(level)

    @property
    def parent(self) -> Optional["Logger"]:
        """Parent logger, or None for the root or a collected parent."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> Tuple["Logger", ...]:
        """Loggers created from this one, in creation order."""
        with self._lock:
            return tuple(self._children)

    @property
    def event_fields(self) -> Mapping[str, Any]:
        """Read-only fields fixed at creation."""
        return self._event_fields

    @property
    def serializer(self) -> Optional[Serializer]:
        return self._serializer

    @property
    def writer(self) -> Any:
        return self._writer

    @property
    def config(self) -> LoggerConfig:
        return self._config

    def child(self, fields: Optional[Mapping[str, Any]] = None) -> "Logger":
        """
        Create a child logger with extra fields.

        The child gets this logger's level and writer, and fields made of
        everything this logger carries plus the given fields. It does not
        inherit the serializer.

        Args:
            fields: Fields added to every entry of the child

        Returns:
            New child logger
        """
        return self._spawn(fields, None)

    def with_fields(self, fields: Optional[Mapping[str, Any]] = None) -> "Logger":
        """Like child(), but keeps this logger's serializer."""
        return self._spawn(fields, self._serializer)

    def with_serializers(self, transforms: Mapping[str, Any]) -> "Logger":
        """
        Create a child logger that transforms selected field values.

        The new serializer replaces any serializer of this logger; the two
        are not combined.

        Args:
            transforms: Mapping from field name to transform callable

        Returns:
            New child logger

        Example:
            safe_log = log.with_serializers({"password": mask})
            safe_log.info("login", {"user": "bob", "password": "hunter2"})
        """
        return self._spawn(None, composite_serializer(transforms))

    def _spawn(
        self,
        fields: Optional[Mapping[str, Any]],
        serializer: Optional[Serializer]
    ) -> "Logger":
        child = Logger(
            writer=self._writer,
            config=self._config,
            level=self._level,
            parent=self,
            fields=merge_fields(self, fields),
            serializer=serializer,
        )
        with self._lock:
            self._children.append(child)
        return child

    def merged_fields(self, fields: Optional[Mapping[str, Any]] = None) -> dict:
        """Effective fields of a log call on this logger."""
        return merge_fields(self, fields)

    def is_enabled(self, level: Level) -> bool:
        """Check whether a log call at level would be written."""
        return is_enabled(self._level, level)

    def log(
        self,
        level: Level,
        message: Any,
        fields: Optional[Mapping[str, Any]] = None
    ) -> None:
        """
        Log a message.

        Write failures go to the config's error_handler and are dropped.

        Args:
            level: Level of the message
            message: Message text (non-strings are converted with str())
            fields: Call-site fields, overriding inherited ones

        Raises:
            SerializerError: If this logger's serializer breaks its contract
        """
        if not self.is_enabled(level):
            return

        entry = LogEntry(
            timestamp=now_timestamp(self._config.utc),
            message=message if isinstance(message, str) else str(message),
            level=level_name(level),
            fields=merge_fields(self, fields),
        )

        if self._serializer is not None:
            entry = serialize_entry(self._serializer, entry)

        try:
            self._writer.write(entry)
        except Exception as e:
            self._config.error_handler(e, entry)

    def debug(self, message: Any, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, message, fields)

    def info(self, message: Any, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, message, fields)

    def warn(self, message: Any, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log warning message."""
        self.log(LogLevel.WARN, message, fields)

    def error(self, message: Any, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log error message."""
        self.log(LogLevel.ERROR, message, fields)

    def fatal(self, message: Any, fields: Optional[Mapping[str, Any]] = None) -> None:
        """Log fatal message. The process is not terminated."""
        self.log(LogLevel.FATAL, message, fields)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Logger(level={self._level!r}, "
            f"fields={dict(context_fields(self))!r}, "
            f"children={len(self._children)})"
        )
