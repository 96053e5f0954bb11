"""
Utility module for logging and file operations.
"""

from .file_utils import ensure_directory_exists, get_file_size
from .logger import get_logger, setup_logger

__all__ = [
    "setup_logger",
    "get_logger",
    "ensure_directory_exists",
    "get_file_size",
]
