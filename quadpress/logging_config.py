"""
Logging setup for command-line use of the quadpress package.
"""

import logging
import sys
from typing import Optional

_config_logger = logging.getLogger(__name__)


def configure_logging(
    level: int = logging.DEBUG,
    log_file: Optional[str] = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console and optional file handlers to the ``quadpress`` logger.

    Handlers are only added once; later calls just adjust levels.

    Args:
        level: Base level of the package logger.
        log_file: Path of a log file. If None, only the console is used.
        console_level: Level of the stdout handler.
        file_level: Level of the file handler.
        format_string: Message format. If None, a default is used.
    """
    package_logger = logging.getLogger("quadpress")
    package_logger.setLevel(level)

    if package_logger.handlers:
        for handler in package_logger.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.setLevel(file_level)
            else:
                handler.setLevel(console_level)
        _config_logger.debug("Logging already configured for 'quadpress'.")
        return package_logger

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
        _config_logger.debug("File handler added for '%s'.", log_file)

    _config_logger.debug("Logging configured for 'quadpress'.")
    return package_logger
