"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

logaro - Hierarchical structured JSON logger
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from logaro.core.logger import Logger, generate_root
from logaro.core.logger_builder import LoggerBuilder
from logaro.core.log_entry import LogEntry, compare_entries
from logaro.core.log_level import LogLevel
from logaro.core.logger_config import LoggerConfig
from logaro.core.exceptions import EncodingError, LogaroError, SerializerError
from logaro.core.serializers import mask, mask_with, truncate

# Import submodules (not all classes by default)
from logaro import formatters
from logaro import writers

__all__ = [
    "Logger",
    "LoggerBuilder",
    "LogEntry",
    "LogLevel",
    "LoggerConfig",
    "generate_root",
    "compare_entries",
    "mask",
    "mask_with",
    "truncate",
    "LogaroError",
    "SerializerError",
    "EncodingError",
    "formatters",
    "writers",
]
