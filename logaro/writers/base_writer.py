"""
Base writer interface

A writer is any object with write(entry) that raises when the entry could
not be written. BaseWriter adds encoding and per-writer locking.
"""

import threading
from abc import ABC, abstractmethod
from typing import Optional

from logaro.core.log_entry import LogEntry
from logaro.formatters.base_formatter import BaseFormatter
from logaro.formatters.json_formatter import JSONFormatter


class BaseWriter(ABC):
    """
    Abstract base class for writers producing one line per entry.

    Thread Safety:
        Writes through the same writer never interleave.
    """

    def __init__(self, formatter: Optional[BaseFormatter] = None):
        """
        Initialize writer.

        Args:
            formatter: Entry encoder (default: JSONFormatter())
        """
        self.formatter = formatter or JSONFormatter()
        self._lock = threading.Lock()

    def write(self, entry: LogEntry) -> None:
        """
        Encode and write one entry.

        The entry is fully encoded before anything reaches the sink, so a
        failed encode writes nothing.

        Raises:
            EncodingError: If the entry cannot be encoded
            OSError: If the sink rejects the write
        """
        line = self.formatter.format(entry)
        with self._lock:
            self._emit(entry, line + "\n")

    @abstractmethod
    def _emit(self, entry: LogEntry, line: str) -> None:
        """Write an encoded line. Called with the writer lock held."""
        pass

    def flush(self) -> None:
        """Flush buffered output."""
        pass

    def close(self) -> None:
        """Release resources."""
        pass

    def __enter__(self) -> "BaseWriter":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
