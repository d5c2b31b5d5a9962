"""
Amount-in-Words Module.

Renders a rupee amount the way it is written on Indian tax invoices:
crore / lakh / thousand grouping, paise as a second clause, and a
trailing "Only".

    >>> amount_to_words(1250.50)
    'One Thousand Two Hundred Fifty Rupees and Fifty Paise Only'
    >>> amount_to_words(100000)
    'One Lakh Rupees Only'

Behaviour for negative amounts is undefined.
"""

from typing import List

from gst_invoice.formatting.currency import Number, round_money, to_decimal

ONES = [
    '', 'One', 'Two', 'Three', 'Four', 'Five', 'Six', 'Seven', 'Eight', 'Nine',
    'Ten', 'Eleven', 'Twelve', 'Thirteen', 'Fourteen', 'Fifteen', 'Sixteen',
    'Seventeen', 'Eighteen', 'Nineteen'
]

TENS = [
    '', '', 'Twenty', 'Thirty', 'Forty', 'Fifty', 'Sixty', 'Seventy', 'Eighty', 'Ninety'
]

# (divisor, label) from largest to smallest Indian group
INDIAN_GROUPS = [
    (10_000_000, 'Crore'),
    (100_000, 'Lakh'),
    (1_000, 'Thousand'),
]


def convert_below_thousand(num: int) -> str:
    """
    English cardinal for 0-999. Zero yields an empty string.

    Values of 1000 and above are handled by the caller's grouping; a
    crore count above 999 still works because hundreds recurse.
    """
    if num == 0:
        return ''

    if num < 20:
        return ONES[num]

    if num < 100:
        ten, one = divmod(num, 10)
        return TENS[ten] + (' ' + ONES[one] if one else '')

    hundred, remainder = divmod(num, 100)
    words = convert_below_thousand(hundred) + ' Hundred'
    if remainder:
        words += ' ' + convert_below_thousand(remainder)
    return words


def _rupee_segments(rupees: int) -> List[str]:
    segments = []
    remainder = rupees

    for divisor, label in INDIAN_GROUPS:
        count, remainder = divmod(remainder, divisor)
        if count:
            segments.append(f"{convert_below_thousand(count)} {label}")

    if remainder:
        segments.append(convert_below_thousand(remainder))

    return segments


def amount_to_words(amount: Number) -> str:
    """
    Convert an amount to Indian-English words.

    An amount of exactly zero returns "Zero". An amount with zero rupees
    and non-zero paise reads "Zero Rupees and ... Paise Only"; the two
    zero cases are intentionally different.

    Args:
        amount: Non-negative amount.

    Returns:
        Words representation ending in "Only" (except for zero).
    """
    if to_decimal(amount) == 0:
        return 'Zero'

    rupee_text, paise_text = f"{round_money(amount):.2f}".split('.')
    rupees = int(rupee_text)
    paise = int(paise_text)

    if rupees == 0:
        result = 'Zero Rupees'
    else:
        result = ' '.join(_rupee_segments(rupees)) + ' Rupees'

    if paise:
        result += ' and ' + convert_below_thousand(paise) + ' Paise'

    return result + ' Only'


__all__ = ['amount_to_words', 'convert_below_thousand']
