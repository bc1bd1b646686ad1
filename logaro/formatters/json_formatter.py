"""
JSON formatter for structured logging

Formats log entries as one JSON object per line
"""

import json
from typing import Any, Callable, Optional

from logaro.core.exceptions import EncodingError
from logaro.core.log_entry import LogEntry
from logaro.formatters.base_formatter import BaseFormatter


class JSONFormatter(BaseFormatter):
    """
    Format log entries as JSON objects.

    Output shape:
        {"fields": {...}, "level": "...", "message": "...", "timestamp": "..."}
    """

    def __init__(
        self,
        sort_keys: bool = True,
        ensure_ascii: bool = False,
        default: Optional[Callable[[Any], Any]] = None
    ):
        """
        Initialize JSON formatter.

        Args:
            sort_keys: Sort object keys so equal entries encode identically
            ensure_ascii: Escape non-ASCII characters
            default: Fallback encoder for values json cannot encode.
                     If None, such values make format() raise.

        Entries whose fields mix key types that cannot be sorted are
        written in insertion order. NaN and infinite floats are rejected.

        Example:
            # Canonical JSON lines
            formatter = JSONFormatter()

            # Encode anything by falling back to str()
            formatter = JSONFormatter(default=str)
        """
        self.sort_keys = sort_keys
        self.ensure_ascii = ensure_ascii
        self.default = default

    def format(self, entry: LogEntry) -> str:
        """
        Format log entry as JSON.

        Args:
            entry: Log entry to format

        Returns:
            JSON string

        Raises:
            EncodingError: If a field value cannot be encoded
        """
        data = entry.to_dict()
        try:
            return self._dumps(data, self.sort_keys)
        except TypeError as e:
            if not self.sort_keys:
                raise EncodingError(str(e)) from e
            # Mixed key types cannot be sorted; keep insertion order instead
            try:
                return self._dumps(data, False)
            except (TypeError, ValueError) as retry_error:
                raise EncodingError(str(retry_error)) from retry_error
        except ValueError as e:
            raise EncodingError(str(e)) from e

    def _dumps(self, data: Any, sort_keys: bool) -> str:
        return json.dumps(
            data,
            sort_keys=sort_keys,
            ensure_ascii=self.ensure_ascii,
            default=self.default,
            allow_nan=False,
        )

    def parse(self, line: str) -> LogEntry:
        """
        Decode a line produced by format().

        Args:
            line: JSON text of one entry

        Returns:
            Decoded LogEntry
        """
        return LogEntry.from_json(line)

    def __repr__(self) -> str:
        """String representation."""
        return f"JSONFormatter(sort_keys={self.sort_keys})"
