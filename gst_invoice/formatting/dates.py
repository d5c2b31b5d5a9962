"""
Date Formatting Module.

Display formats used on the invoice and a tolerant parser for the
timestamps found in invoice definition files.

Author: ML Engineering Team
"""

from datetime import datetime, date
from typing import Optional, Union

from dateutil import parser as date_parser

from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

DATE_FORMAT = "%d/%m/%Y"
DATETIME_FORMAT = "%d/%m/%Y %I:%M %p"
INVOICE_NUMBER_DATE_FORMAT = "%d%m%Y"


def format_date(value: Union[date, datetime]) -> str:
    """
    Format an issue date as DD/MM/YYYY.

    Example:
        >>> format_date(datetime(2026, 10, 19))
        "19/10/2026"
    """
    return value.strftime(DATE_FORMAT)


def format_datetime(value: datetime) -> str:
    """
    Format a service-period timestamp as DD/MM/YYYY hh:mm AM/PM.

    Example:
        >>> format_datetime(datetime(2026, 10, 19, 14, 5))
        "19/10/2026 02:05 PM"
    """
    return value.strftime(DATETIME_FORMAT)


def parse_timestamp(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """
    Parse a timestamp from a definition file.

    Accepts datetime and date objects (YAML already yields these for ISO
    values) and free-form strings, read day-first as is usual for Indian
    dates ("19/10/2026 2:00 PM").

    Args:
        value: Raw value.

    Returns:
        datetime, or None when the value is empty.

    Raises:
        ValueError: If a string cannot be parsed.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    try:
        return date_parser.parse(str(value), dayfirst=True)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Could not parse timestamp: {value}")
        raise ValueError(f"Unrecognised timestamp: {value!r}") from e
