"""
Formatting Module for the GST Invoice Generator.

This module provides:
    - Indian-numbering amount-in-words rendering
    - Indian digit-grouped currency display
    - Decimal rounding helpers
    - Date display formats

Author: ML Engineering Team
"""

from .currency import format_grouped_currency, format_amount, round_money, to_decimal
from .words import amount_to_words
from .dates import format_date, format_datetime, parse_timestamp

__all__ = [
    'amount_to_words',
    'format_grouped_currency',
    'format_amount',
    'round_money',
    'to_decimal',
    'format_date',
    'format_datetime',
    'parse_timestamp',
]
