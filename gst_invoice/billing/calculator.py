"""
GST Calculator.

Splits the tax on a taxable value into its GST components. Intra-state
supplies carry CGST and SGST in equal halves; inter-state supplies carry
the whole tax as IGST.

Inputs are not validated: callers supply non-negative finite values.
"""

from dataclasses import dataclass
from decimal import Decimal

from gst_invoice.formatting.currency import Number, to_decimal

_ZERO = Decimal(0)


@dataclass(frozen=True)
class TaxBreakdown:
    """
    Unrounded GST components for one taxable value.

    Attributes:
        cgst: Central component (same-state only)
        sgst: State component (same-state only)
        igst: Integrated component (cross-state only)
        total: cgst + sgst + igst
    """
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    total: Decimal


def compute_tax(base_amount: Number, rate_percent: Number, is_cross_locality: bool) -> TaxBreakdown:
    """
    Compute the GST split for a taxable value.

    Args:
        base_amount: Tax-exclusive value.
        rate_percent: GST rate in percent.
        is_cross_locality: True for an inter-state supply.

    Returns:
        TaxBreakdown with total = base_amount * rate_percent / 100.

    Example:
        >>> compute_tax(1000, 18, True).igst
        Decimal('180')
        >>> compute_tax(1000, 18, False).cgst
        Decimal('90')
    """
    total = to_decimal(base_amount) * to_decimal(rate_percent) / 100

    if is_cross_locality:
        return TaxBreakdown(cgst=_ZERO, sgst=_ZERO, igst=total, total=total)

    half = total / 2
    return TaxBreakdown(cgst=half, sgst=half, igst=_ZERO, total=total)
