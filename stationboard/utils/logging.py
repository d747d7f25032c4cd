"""Logging utilities for the station board."""

import logging

LOG_FILE = "/tmp/stationboard_debug.log"

# Global state
_console_logging_enabled = None
_file_logger = None


def _console_enabled() -> bool:
    """Console echo is on unless the TUI has taken over the terminal"""
    if _console_logging_enabled is None:
        return True
    return _console_logging_enabled


def set_console_logging(enabled: bool):
    """Explicitly enable/disable console logging"""
    global _console_logging_enabled
    _console_logging_enabled = enabled


def _get_file_logger() -> logging.Logger:
    global _file_logger

    if _file_logger is None:
        _file_logger = logging.getLogger("stationboard_file")
        _file_logger.setLevel(logging.DEBUG)
        file_handler = logging.FileHandler(LOG_FILE)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        )
        _file_logger.addHandler(file_handler)
        _file_logger.propagate = False
    return _file_logger


def log(message: str, level: int = logging.INFO):
    """
    Log a message:
    - Always writes to the debug log file
    - Echoes to the console for CLI operations (event lookup, slug resolution)
    - Stays quiet on the console while the TUI is running
    """
    _get_file_logger().log(level, message)

    if _console_enabled():
        print(message)
