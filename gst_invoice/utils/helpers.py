"""
Helper Utilities Module.

Small filesystem and display helpers shared by the export and storage
layers.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - safe_filename: Sanitize filenames for filesystem and blob keys
    - generate_timestamp: Generate formatted timestamps
    - format_file_size: Human-readable byte counts
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Union, Optional


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/invoices")
        PosixPath('outputs/invoices')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def safe_filename(filename: str, replacement: str = "_") -> str:
    """
    Sanitize a filename by replacing characters that are invalid on
    common filesystems.

    Args:
        filename: Original filename.
        replacement: Character to replace invalid characters with.

    Returns:
        Sanitized filename.

    Example:
        >>> safe_filename("Invoice-VMP/01.pdf")
        "Invoice-VMP_01.pdf"
    """
    invalid_chars = r'[<>:"/\\|?*\x00-\x1f]'
    sanitized = re.sub(invalid_chars, replacement, filename)
    sanitized = sanitized.strip('. ')

    if not sanitized:
        sanitized = "unnamed"

    return sanitized


def generate_timestamp(
    format_str: str = "%Y%m%d_%H%M%S",
    now: Optional[datetime] = None
) -> str:
    """
    Generate a formatted timestamp string.

    Args:
        format_str: strftime format string.
        now: Moment to format. Defaults to the current local time.

    Returns:
        Formatted timestamp string.
    """
    return (now or datetime.now()).strftime(format_str)


def format_file_size(size_bytes: int) -> str:
    """
    Format a byte count for display.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Size string in B, KB or MB with one decimal for KB and MB.

    Example:
        >>> format_file_size(512)
        "512 B"
        >>> format_file_size(1536)
        "1.5 KB"
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"
