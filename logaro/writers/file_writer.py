"""File writer for JSON lines"""

from pathlib import Path
from typing import Optional

from logaro.core.log_entry import LogEntry
from logaro.formatters.base_formatter import BaseFormatter
from logaro.writers.base_writer import BaseWriter


class FileWriter(BaseWriter):
    """Write logs to file, one encoded entry per line."""

    def __init__(
        self,
        filepath: str,
        mode: str = "a",
        encoding: str = "utf-8",
        formatter: Optional[BaseFormatter] = None
    ):
        """
        Initialize file writer.

        Args:
            filepath: Path to log file
            mode: File open mode (default: 'a' for append)
            encoding: File encoding (default: 'utf-8')
            formatter: Entry encoder (default: JSONFormatter())
        """
        super().__init__(formatter)
        self.filepath = Path(filepath)
        self.mode = mode
        self.encoding = encoding
        self._file = None
        self._open()

    def _open(self):
        """Open log file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, self.mode, encoding=self.encoding)

    def _emit(self, entry: LogEntry, line: str) -> None:
        if self._file is None:
            raise ValueError(f"write to closed log file {self.filepath}")
        self._file.write(line)
        self._file.flush()

    def flush(self):
        """Flush file buffer."""
        with self._lock:
            if self._file:
                self._file.flush()

    def close(self):
        """Close file."""
        with self._lock:
            if self._file:
                self._file.close()
                self._file = None
