"""
File utility functions for the application.

Provides common file operations like directory creation and size reporting.
"""

import os


def ensure_directory_exists(directory_path: str) -> None:
    """
    Create directory if it doesn't exist.

    Args:
        directory_path: Path to directory to create

    Raises:
        OSError: If directory creation fails
    """
    os.makedirs(directory_path, exist_ok=True)


def get_file_size(file_path: str, human_readable: bool = True) -> str:
    """
    Get file size in human-readable format or bytes.

    Args:
        file_path: Path to file
        human_readable: If True, return formatted string (e.g., "1.5 MB")

    Returns:
        str: File size as string

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    size_bytes: float = os.path.getsize(file_path)

    if not human_readable:
        return str(int(size_bytes))

    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0

    return f"{size_bytes:.2f} PB"
