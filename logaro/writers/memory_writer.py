"""In-memory writer, mainly for tests"""

from typing import List, Optional

from logaro.core.log_entry import LogEntry
from logaro.formatters.base_formatter import BaseFormatter
from logaro.writers.base_writer import BaseWriter


class MemoryWriter(BaseWriter):
    """
    Keep written entries and their encoded lines in memory.

    Entries are encoded like any other writer, so encoding failures
    surface the same way.
    """

    def __init__(self, formatter: Optional[BaseFormatter] = None):
        super().__init__(formatter)
        self.entries: List[LogEntry] = []
        self.lines: List[str] = []

    def _emit(self, entry: LogEntry, line: str) -> None:
        self.entries.append(entry)
        self.lines.append(line.rstrip("\n"))

    def clear(self) -> None:
        """Drop everything written so far."""
        with self._lock:
            self.entries.clear()
            self.lines.clear()
