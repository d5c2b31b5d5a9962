"""
Invoice Aggregator.

Recomputes every derived total of an invoice from its line items and the
customer's locality.

Rounding happens per line item: each item's base value and each of its
tax components is rounded to 2 places first, and the rounded values are
then summed. Summing first and rounding once can differ by a paisa per
item, so the order is fixed.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from gst_invoice.billing.calculator import compute_tax
from gst_invoice.formatting.currency import ZERO, Number, round_money, to_decimal
from gst_invoice.models.invoice import LineItem
from gst_invoice.models.localities import is_cross_locality
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class InvoiceTotals:
    """
    Derived totals for one invoice.

    Attributes:
        sub_total: Sum of rounded tax-exclusive line values
        cgst: Sum of rounded per-item CGST
        sgst: Sum of rounded per-item SGST
        igst: Sum of rounded per-item IGST, None for same-state invoices
        total_tax: cgst + sgst + (igst or 0)
        total: sub_total + total_tax
        balance: total - amount received
        is_cross_locality: Which split was applied
    """
    sub_total: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Optional[Decimal]
    total_tax: Decimal
    total: Decimal
    balance: Decimal
    is_cross_locality: bool


def recompute(
    items: Iterable[LineItem],
    customer_state: Optional[str],
    home_state: str,
    amount_received: Number = 0
) -> InvoiceTotals:
    """
    Aggregate line items into invoice totals.

    Pure function; an empty item sequence gives all-zero totals.

    Args:
        items: Line items in display order.
        customer_state: Customer's state name.
        home_state: Issuer's state name.
        amount_received: Amount already paid.

    Returns:
        InvoiceTotals.

    Example:
        >>> item = LineItem("Room", "996311", 2, 5000, 12)
        >>> recompute([item], "Uttar Pradesh", "Uttar Pradesh").total
        Decimal('11200.00')
    """
    cross = is_cross_locality(customer_state, home_state)

    sub_total = ZERO
    cgst = ZERO
    sgst = ZERO
    igst = ZERO
    count = 0

    for item in items:
        base = item.base_amount
        tax = compute_tax(base, item.gst_rate, cross)

        sub_total += round_money(base)
        cgst += round_money(tax.cgst)
        sgst += round_money(tax.sgst)
        igst += round_money(tax.igst)
        count += 1

    total_tax = cgst + sgst + igst
    total = sub_total + total_tax
    balance = total - round_money(to_decimal(amount_received))

    logger.debug(
        f"Recomputed {count} item(s): sub_total={sub_total}, "
        f"tax={total_tax}, total={total}, cross_state={cross}"
    )

    return InvoiceTotals(
        sub_total=sub_total,
        cgst=cgst,
        sgst=sgst,
        igst=igst if cross else None,
        total_tax=total_tax,
        total=total,
        balance=balance,
        is_cross_locality=cross,
    )
