"""
Log formatters module

Formatters encode LogEntry objects into the text written by writers.
"""

from logaro.formatters.base_formatter import BaseFormatter
from logaro.formatters.json_formatter import JSONFormatter

__all__ = [
    "BaseFormatter",
    "JSONFormatter",
]
