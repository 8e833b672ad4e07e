"""Utility modules for jsonlocalize.

This package provides utility functions for logging, file path handling and tolerant JSON decoding.
"""

from utils.file_utils import FileUtils
from utils.json_utils import JsonUtils
from utils.logger_utils import LoggerUtils

__all__: list[str] = ["FileUtils", "JsonUtils", "LoggerUtils"]
