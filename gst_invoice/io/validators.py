"""
Invoice Definition Validators.

The billing layer assumes well-formed input and never validates. These
checks run once, where an invoice definition enters the system, and
report every problem found rather than stopping at the first.

Author: ML Engineering Team
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Tuple

from gst_invoice.models.invoice import PaymentMethod
from gst_invoice.models.localities import STANDARD_GST_RATES, is_known_state
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)


def _as_decimal(value: Any):
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return number if number.is_finite() else None


class ItemValidator:
    """
    Validates one line-item definition.

    Checks for:
        - Non-blank name
        - Positive integer quantity
        - Non-negative unit price and GST rate

    A rate off the standard slabs is valid but noted in ``warnings``.
    """

    def __init__(self) -> None:
        self.warnings: List[str] = []

    def validate(self, item: Any, index: int) -> List[str]:
        label = f"items[{index}]"
        if not isinstance(item, dict):
            return [f"{label} must be a mapping, got {type(item).__name__}"]

        issues = []

        if not str(item.get('name', '')).strip():
            issues.append(f"{label}: name is required")

        quantity = item.get('quantity', 1)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            issues.append(f"{label}: quantity must be a positive integer, got {quantity!r}")

        for field in ('unit_price', 'gst_rate'):
            value = _as_decimal(item.get(field, 0))
            if value is None:
                issues.append(f"{label}: {field} is not a number")
            elif value < 0:
                issues.append(f"{label}: {field} must not be negative")
            elif field == 'gst_rate' and value not in STANDARD_GST_RATES:
                slabs = ', '.join(str(rate) for rate in STANDARD_GST_RATES)
                self.warnings.append(f"{label}: gst_rate {value} is not a standard slab ({slabs})")

        return issues


class InvoiceValidator:
    """
    Validates a complete invoice definition.

    Non-blocking notes from the last run are kept in ``warnings``.

    Example:
        >>> validator = InvoiceValidator()
        >>> ok, issues = validator.validate({"customer": {"name": "A"}, "items": []})
        >>> ok
        False
    """

    def __init__(self) -> None:
        self.item_validator = ItemValidator()
        self.warnings: List[str] = []

    def validate(self, data: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate an invoice definition.

        Args:
            data: Parsed definition.

        Returns:
            Tuple of (is_valid, issues).
        """
        issues = []
        self.item_validator.warnings = []
        customer = data.get('customer') or {}

        if isinstance(customer, dict):
            for field in ('name', 'address'):
                if not str(customer.get(field, '') or '').strip():
                    issues.append(f"customer.{field} is required")

            state = customer.get('state')
            if state and not is_known_state(state):
                issues.append(f"customer.state is not a known state: {state!r}")
        else:
            issues.append(f"customer must be a mapping, got {type(customer).__name__}")

        items = data.get('items') or []
        if not isinstance(items, list):
            issues.append("items must be a list")
            items = []
        for index, item in enumerate(items):
            issues.extend(self.item_validator.validate(item, index))

        received = _as_decimal(data.get('amount_received', 0) or 0)
        if received is None or received < 0:
            issues.append("amount_received must be a non-negative number")

        method = data.get('payment_method', 'Cash')
        try:
            PaymentMethod.parse(method)
        except ValueError:
            issues.append(f"payment_method must be one of Cash, Online; got {method!r}")

        self.warnings = list(self.item_validator.warnings)
        for warning in self.warnings:
            logger.warning(warning)
        for issue in issues:
            logger.debug(f"Validation issue: {issue}")

        return len(issues) == 0, issues
