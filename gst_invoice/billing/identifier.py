"""
Invoice Number Generator.

Numbers read PREFIX-DDMMYYYY-NNNN: the issuer prefix, the issue date and
a zero-padded random suffix. Uniqueness is not guaranteed; two invoices
on the same day collide with probability 1 in 10,000.
"""

import random
import re
from datetime import datetime
from typing import Optional

from config import get_config
from gst_invoice.formatting.dates import INVOICE_NUMBER_DATE_FORMAT


def generate_invoice_number(
    prefix: Optional[str] = None,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None
) -> str:
    """
    Generate a human-readable invoice number.

    Args:
        prefix: Number prefix. Defaults to ``invoice.number_prefix``.
        now: Issue moment. Defaults to the current local time.
        rng: Random source, injectable for reproducible numbers.

    Returns:
        Invoice number string.

    Example:
        >>> generate_invoice_number("VMP", datetime(2026, 10, 19))
        'VMP-19102026-0417'
    """
    prefix = prefix or get_config("invoice.number_prefix", "VMP")
    now = now or datetime.now()
    suffix = (rng or random).randint(0, 9999)
    return f"{prefix}-{now.strftime(INVOICE_NUMBER_DATE_FORMAT)}-{suffix:04d}"


def invoice_number_pattern(prefix: str) -> re.Pattern:
    """Regex matching numbers produced for a prefix."""
    return re.compile(rf"^{re.escape(prefix)}-\d{{8}}-\d{{4}}$")
