"""
Logging configuration module.

Provides centralized logging functionality with both file and console output.
"""

import logging
from datetime import datetime
from pathlib import Path

# Global logger instance
_logger: logging.Logger | None = None


def setup_logger(
    name: str = "survey_analysis",
    log_dir: str = "artifacts/logs",
    level: int = logging.INFO,
    console_output: bool = True,
) -> logging.Logger:
    """
    Set up and configure the application logger.

    Args:
        name: Logger name
        log_dir: Directory to store log files
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to output logs to console

    Returns:
        logging.Logger: Configured logger instance
    """
    global _logger

    # Return existing logger if already configured
    if _logger is not None:
        return _logger

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        _logger = logger
        return logger

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = str(log_path / f"survey_analysis_{timestamp}.log")

    detailed_formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(levelname)-8s] [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    simple_formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s: %(message)s", datefmt="%H:%M:%S"
    )

    # File handler (detailed format)
    file_handler = logging.FileHandler(log_filename, mode="a", encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(detailed_formatter)
    logger.addHandler(file_handler)

    # Console handler (simple format) - optional
    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    logger.info(f"Logger initialized. Log file: {log_filename}")

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the global logger instance.

    If the logger hasn't been set up yet, returns the named logger without
    attaching handlers, so library use and tests don't create log files.

    Returns:
        logging.Logger: The logger instance
    """
    if _logger is None:
        return logging.getLogger("survey_analysis")
    return _logger
