"""Writers module - Log output sinks"""

from logaro.writers.base_writer import BaseWriter
from logaro.writers.stream_writer import StreamWriter
from logaro.writers.file_writer import FileWriter
from logaro.writers.memory_writer import MemoryWriter

__all__ = ["BaseWriter", "StreamWriter", "FileWriter", "MemoryWriter"]
