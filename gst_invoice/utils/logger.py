"""
Logging Configuration Module.

Centralized logging for the invoice generator. Every module obtains a
child of the ``gst_invoice`` logger, so a single call to setup_logger()
at startup controls console colouring, level and the optional rotating
log file for the whole package.

Usage:
    from gst_invoice.utils.logger import setup_logger, get_logger

    setup_logger()
    logger = get_logger(__name__)
    logger.info("Rendering invoice VMP-19102026-0042")
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

try:
    import colorama
    from colorama import Fore, Style
    colorama.init()
    COLORAMA_AVAILABLE = True
except ImportError:
    COLORAMA_AVAILABLE = False


ROOT_LOGGER_NAME = "gst_invoice"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that wraps each console record in a level colour.

    Colors:
        - DEBUG: Cyan
        - INFO: Green
        - WARNING: Yellow
        - ERROR / CRITICAL: Red (CRITICAL bright)
    """

    COLORS = {
        logging.DEBUG: Fore.CYAN if COLORAMA_AVAILABLE else '',
        logging.INFO: Fore.GREEN if COLORAMA_AVAILABLE else '',
        logging.WARNING: Fore.YELLOW if COLORAMA_AVAILABLE else '',
        logging.ERROR: Fore.RED if COLORAMA_AVAILABLE else '',
        logging.CRITICAL: Fore.RED + Style.BRIGHT if COLORAMA_AVAILABLE else '',
    }
    RESET = Style.RESET_ALL if COLORAMA_AVAILABLE else ''

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, '')
        return f"{color}{super().format(record)}{self.RESET}"


def _build_file_handler(
    log_file: str,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    """Create a rotating file handler, making its directory if needed."""
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logger(
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[str] = None,
    max_bytes: int = 10485760,  # 10 MB
    backup_count: int = 5,
    colorize: bool = True,
    quiet: bool = False
) -> logging.Logger:
    """
    Configure the package logger.

    Call once at application startup. Handlers attached by earlier calls
    are replaced, so repeated calls (tests, --debug re-configuration) do
    not duplicate output.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Record format string.
        date_format: Timestamp format string.
        log_file: Path to a log file. File logging is off when None.
        max_bytes: Size at which the log file rotates.
        backup_count: Number of rotated files to keep.
        colorize: Whether to colour console output.
        quiet: Suppress the console handler entirely.

    Returns:
        The configured ``gst_invoice`` logger.
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    if not quiet:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        if colorize and COLORAMA_AVAILABLE:
            console_handler.setFormatter(ColoredFormatter(log_format, datefmt=date_format))
        else:
            console_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        root_logger.addHandler(console_handler)

    if log_file:
        root_logger.addHandler(
            _build_file_handler(
                log_file,
                numeric_level,
                logging.Formatter(log_format, datefmt=date_format),
                max_bytes,
                backup_count
            )
        )

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    root_logger.propagate = False
    root_logger.debug("Logging initialized")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module, namespaced under ``gst_invoice``.

    Args:
        name: Logger name, typically __name__.

    Returns:
        Logger instance.
    """
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_level(level: str) -> None:
    """Change the level of the package logger and its handlers."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers:
        handler.setLevel(numeric_level)


def setup_logger_from_config(quiet: bool = False) -> logging.Logger:
    """
    Initialize logging from the ``logging.*`` section of settings.yaml.

    Falls back to defaults when the configuration cannot be read.

    Args:
        quiet: Suppress console output.

    Returns:
        Configured package logger.
    """
    try:
        from config import get_config

        log_file = None
        if get_config("logging.file.enabled", False):
            log_file = get_config("logging.file.path")

        return setup_logger(
            level=get_config("logging.level", "INFO"),
            log_format=get_config("logging.format"),
            date_format=get_config("logging.date_format"),
            log_file=log_file,
            max_bytes=get_config("logging.file.max_bytes", 10485760),
            backup_count=get_config("logging.file.backup_count", 5),
            colorize=get_config("logging.console.colorize", True),
            quiet=quiet
        )
    except (OSError, ValueError) as e:
        print(f"Warning: Could not load logging config, using defaults: {e}")
        return setup_logger(quiet=quiet)
