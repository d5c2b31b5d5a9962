"""
Invoice Editing Session.

InvoiceSession owns one mutable InvoiceRecord and is its only mutator.
Every change to the item collection or the customer's state triggers a
synchronous recompute that writes all derived totals as a unit; the
derived fields are never edited directly.

Usage:
    session = InvoiceSession()
    session.update_customer(name="A. Sharma", state="Maharashtra")
    item = session.add_item("Deluxe Room", "996311", 1, 1000, 18)
    session.set_amount_received(500)
    record = session.record   # igst=180.00, total=1180.00, balance=680.00

Author: ML Engineering Team
"""

from datetime import datetime
from typing import Iterable, List, Optional

from config import get_config
from gst_invoice.billing.aggregator import InvoiceTotals, recompute
from gst_invoice.billing.identifier import generate_invoice_number
from gst_invoice.formatting.currency import Number, round_money
from gst_invoice.models.company import CompanyProfile, load_company_profile
from gst_invoice.models.invoice import (
    DocumentState,
    InvoiceRecord,
    LineItem,
    PaymentMethod,
)
from gst_invoice.models.localities import GST_RATES, HSN_CODES
from gst_invoice.utils.exceptions import ItemNotFoundError, ItemValidationError
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

CUSTOMER_FIELDS = (
    'name', 'company_name', 'address', 'city', 'state',
    'pincode', 'contact_no', 'gstin',
)


class InvoiceSession:
    """
    Explicit mutable aggregate for a single invoice being edited.

    Attributes:
        record: The live InvoiceRecord
        company: Issuer profile; its state is the home state
        totals: Result of the last recompute

    Example:
        >>> session = InvoiceSession()
        >>> session.add_item("Deluxe Room", "996311", 2, 5000, 12)
        >>> session.record.total
        Decimal('11200.00')
    """

    def __init__(
        self,
        record: Optional[InvoiceRecord] = None,
        company: Optional[CompanyProfile] = None
    ) -> None:
        """
        Start a session.

        Args:
            record: Existing record to edit. A fresh record with a
                    generated number is created when omitted.
            company: Issuer profile. Defaults to the configured one.
        """
        self.company = company or load_company_profile()

        if record is None:
            now = datetime.now()
            record = InvoiceRecord(
                invoice_no=generate_invoice_number(now=now),
                invoice_date=now,
                check_in_time=now,
                check_out_time=now,
                payment_method=PaymentMethod.parse(
                    get_config("invoice.default_payment_method", "Cash")
                ),
            )

        self.record = record
        self.totals: Optional[InvoiceTotals] = None
        self.recompute()

        logger.debug(f"InvoiceSession started for {self.record.invoice_no}")

    @property
    def is_cross_locality(self) -> bool:
        return self.totals.is_cross_locality

    def recompute(self) -> InvoiceTotals:
        """
        Recompute and store every derived field.

        Returns:
            The new totals.
        """
        totals = recompute(
            self.record.items,
            self.record.customer.state,
            self.company.state,
            self.record.amount_received,
        )

        self.record.sub_total = totals.sub_total
        self.record.cgst = totals.cgst
        self.record.sgst = totals.sgst
        self.record.igst = totals.igst
        self.record.total = totals.total
        self.record.balance = totals.balance
        self.totals = totals
        return totals

    def _touch(self) -> None:
        if self.record.state is DocumentState.EXPORTED:
            logger.warning(
                f"Invoice {self.record.invoice_no} was already exported; "
                f"editing returns it to draft"
            )
            self.record.state = DocumentState.DRAFT

    def add_item(
        self,
        name: str,
        hsn_code: Optional[str] = None,
        quantity: int = 1,
        unit_price: Number = 0,
        gst_rate: Optional[Number] = None
    ) -> LineItem:
        """
        Append a line item and recompute.

        Args:
            name: Service description.
            hsn_code: Classification code. Defaults to ``invoice.default_hsn_code``.
            quantity: Units.
            unit_price: Tax-exclusive price per unit.
            gst_rate: Rate in percent. Defaults to ``invoice.default_gst_rate``.

        Returns:
            The created LineItem.

        Raises:
            ItemValidationError: If the name is blank or the price is zero.
        """
        if not name or not name.strip():
            raise ItemValidationError("name", name, "Item name is required")
        if not unit_price:
            raise ItemValidationError("unit_price", unit_price, "Price per unit is required")

        item = LineItem(
            name=name.strip(),
            hsn_code=hsn_code or str(get_config(
                "invoice.default_hsn_code", HSN_CODES["ROOM_ACCOMMODATION"])),
            quantity=quantity,
            unit_price=unit_price,
            gst_rate=gst_rate if gst_rate is not None else get_config(
                "invoice.default_gst_rate", GST_RATES["FOOD_SERVICES"]),
        )

        self._touch()
        self.record.items.append(item)
        self.recompute()

        logger.info(f"Added item '{item.name}' (amount {item.amount})")
        return item

    def remove_item(self, item_id: str) -> LineItem:
        """
        Remove a line item by id and recompute.

        Raises:
            ItemNotFoundError: If no item has that id.
        """
        item = self.record.find_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        self._touch()
        self.record.items.remove(item)
        self.recompute()

        logger.info(f"Removed item '{item.name}'")
        return item

    def replace_items(self, items: Iterable[LineItem]) -> None:
        """Set the whole item collection and recompute."""
        self._touch()
        self.record.items = list(items)
        self.recompute()

    def update_customer(self, **fields) -> None:
        """
        Update customer profile fields.

        Totals are recomputed when the state changes, since that can
        switch the tax split.

        Raises:
            AttributeError: For a field the profile does not have.
        """
        customer = self.record.customer
        previous_state = customer.state

        for key, value in fields.items():
            if key not in CUSTOMER_FIELDS:
                raise AttributeError(f"CustomerProfile has no field '{key}'")
            setattr(customer, key, value)

        self._touch()
        if customer.state != previous_state:
            logger.debug(f"Customer state changed: {previous_state!r} -> {customer.state!r}")
            self.recompute()

    def set_amount_received(self, amount: Number) -> None:
        """Record the amount paid; the balance follows on record and totals."""
        self._touch()
        self.record.amount_received = round_money(amount)
        self.recompute()

    def set_payment_method(self, method) -> None:
        self._touch()
        self.record.payment_method = (
            method if isinstance(method, PaymentMethod) else PaymentMethod.parse(method)
        )

    def set_terms(self, terms: Optional[str]) -> None:
        self._touch()
        self.record.terms = terms or None

    def mark_exported(self) -> None:
        """Tag the record as exported after a document has been produced."""
        self.record.state = DocumentState.EXPORTED

    @property
    def items(self) -> List[LineItem]:
        return list(self.record.items)
