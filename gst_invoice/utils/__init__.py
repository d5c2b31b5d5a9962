"""
Utility Module for the GST Invoice Generator.

Common utilities used across all other modules:
    - Logging configuration
    - Exception hierarchy
    - File and display helpers
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, safe_filename, generate_timestamp, format_file_size

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'safe_filename',
    'generate_timestamp',
    'format_file_size'
]
