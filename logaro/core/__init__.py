"""
Core module for logaro

This module contains the fundamental classes:
- Logger: Node of the logger tree
- LoggerBuilder: Builder pattern for root logger construction
- LogEntry: Log entry data structure
- LogLevel: Log level enumeration
- LoggerConfig: Configuration management
"""

from logaro.core.exceptions import EncodingError, LogaroError, SerializerError
from logaro.core.log_entry import LogEntry, compare_entries
from logaro.core.log_level import LogLevel, is_enabled, severity
from logaro.core.logger_config import LoggerConfig
from logaro.core.logger import Logger, generate_root
from logaro.core.logger_builder import LoggerBuilder

__all__ = [
    "Logger",
    "LoggerBuilder",
    "LogEntry",
    "LogLevel",
    "LoggerConfig",
    "generate_root",
    "compare_entries",
    "is_enabled",
    "severity",
    "LogaroError",
    "SerializerError",
    "EncodingError",
]
