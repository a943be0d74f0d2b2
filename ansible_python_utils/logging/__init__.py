"""Module de logging."""

from ansible_python_utils.logging.base import Logger
from ansible_python_utils.logging.file_logger import FileLogger

__all__ = [
    "Logger",
    "FileLogger",
]
