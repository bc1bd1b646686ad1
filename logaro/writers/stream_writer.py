"""Stream writer for JSON lines"""

import sys
from typing import Optional, TextIO

from logaro.core.log_entry import LogEntry
from logaro.formatters.base_formatter import BaseFormatter
from logaro.writers.base_writer import BaseWriter


class StreamWriter(BaseWriter):
    """Write one encoded entry per line to a text stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        formatter: Optional[BaseFormatter] = None
    ):
        """
        Initialize stream writer.

        Args:
            stream: Output stream (default: sys.stdout at write time)
            formatter: Entry encoder (default: JSONFormatter())
        """
        super().__init__(formatter)
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _emit(self, entry: LogEntry, line: str) -> None:
        stream = self.stream
        stream.write(line)
        stream.flush()

    def flush(self) -> None:
        """Flush stream."""
        self.stream.flush()
