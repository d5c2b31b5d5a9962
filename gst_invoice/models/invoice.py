"""
Invoice Data Classes.

This module defines the structures that flow from the billing layer into
the document renderers: line items, the customer profile and the
invoice record with its derived totals.

Derived fields on InvoiceRecord (sub_total, sgst, cgst, igst, total,
balance) are written only by InvoiceSession.recompute(); they are plain
attributes so renderers can read them without recomputation.

Author: ML Engineering Team
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Any, List, Optional

from gst_invoice.formatting.currency import ZERO, round_money, to_decimal
from gst_invoice.formatting.dates import parse_timestamp
from gst_invoice.models.localities import state_code


class PaymentMethod(str, Enum):
    """How the guest settled the bill."""
    CASH = "Cash"
    ONLINE = "Online"

    @classmethod
    def parse(cls, value: str) -> 'PaymentMethod':
        """Case-insensitive lookup by display value."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown payment method: {value!r}")


class DocumentState(str, Enum):
    """Informational lifecycle tag; exported invoices are not locked."""
    DRAFT = "draft"
    EXPORTED = "exported"


def _new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass
class LineItem:
    """
    A single billable line.

    Attributes:
        name: Service description (e.g. "Deluxe Room")
        hsn_code: SAC/HSN classification code
        quantity: Units (nights, meals), positive integer
        unit_price: Tax-exclusive price per unit
        gst_rate: Tax rate in percent
        id: Opaque identifier, unique within one invoice

    Example:
        >>> item = LineItem("Deluxe Room", "996311", 2, Decimal("5000"), Decimal("12"))
        >>> item.amount
        Decimal('11200.00')
    """
    name: str
    hsn_code: str
    quantity: int
    unit_price: Decimal
    gst_rate: Decimal
    id: str = field(default_factory=_new_item_id)

    def __post_init__(self):
        self.quantity = int(self.quantity)
        self.unit_price = to_decimal(self.unit_price)
        self.gst_rate = to_decimal(self.gst_rate)

    @property
    def base_amount(self) -> Decimal:
        """Tax-exclusive line value, quantity x unit price."""
        return self.quantity * self.unit_price

    @property
    def amount(self) -> Decimal:
        """Tax-inclusive line value, rounded to 2 places."""
        return round_money(self.base_amount * (1 + self.gst_rate / 100))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'hsn_code': self.hsn_code,
            'quantity': self.quantity,
            'unit_price': str(self.unit_price),
            'gst_rate': str(self.gst_rate),
            'amount': str(self.amount),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineItem':
        kwargs = dict(
            name=data.get('name', ''),
            hsn_code=str(data.get('hsn_code', '')),
            quantity=data.get('quantity', 1),
            unit_price=data.get('unit_price', 0),
            gst_rate=data.get('gst_rate', 0),
        )
        if data.get('id'):
            kwargs['id'] = str(data['id'])
        return cls(**kwargs)


@dataclass
class CustomerProfile:
    """
    The guest or organisation being billed.

    Attributes:
        name: Guest name (required)
        address: Street address (required)
        city: City
        state: State name from the locality enumeration
        pincode: Postal code
        contact_no: Phone number
        company_name: Optional organisation; printed as "Bill To" when set
        gstin: Optional GST registration of the customer
    """
    name: str = ''
    address: str = ''
    city: str = ''
    state: str = ''
    pincode: str = ''
    contact_no: str = ''
    company_name: Optional[str] = None
    gstin: Optional[str] = None

    @property
    def state_code(self) -> Optional[str]:
        return state_code(self.state)

    @property
    def bill_to(self) -> str:
        return self.company_name or self.name

    @property
    def full_address(self) -> str:
        """Address joined with city, state and pincode where present."""
        parts = [self.address] + [p for p in (self.city, self.state, self.pincode) if p]
        return ', '.join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'company_name': self.company_name,
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'pincode': self.pincode,
            'contact_no': self.contact_no,
            'gstin': self.gstin,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CustomerProfile':
        return cls(
            name=data.get('name', ''),
            company_name=data.get('company_name') or None,
            address=data.get('address', ''),
            city=data.get('city', ''),
            state=data.get('state', ''),
            pincode=str(data.get('pincode', '') or ''),
            contact_no=str(data.get('contact_no', '') or ''),
            gstin=data.get('gstin') or None,
        )


@dataclass
class InvoiceRecord:
    """
    A complete tax invoice.

    Exactly one tax presentation is populated: igst is None for
    same-state invoices, and sgst/cgst are zero for cross-state ones.

    Attributes:
        invoice_no: Human-readable identifier
        invoice_date: Issue timestamp
        check_in_time: Service period start
        check_out_time: Service period end
        customer: Billed party
        items: Ordered line items
        sub_total: Sum of tax-exclusive line values (derived)
        sgst: State GST total (derived)
        cgst: Central GST total (derived)
        igst: Integrated GST total, cross-state only (derived)
        total: Grand total (derived)
        amount_received: Amount paid so far
        balance: total - amount_received, negative on overpayment (derived)
        payment_method: Cash or Online
        terms: Optional free-text terms and conditions
        state: Draft/exported tag
    """
    invoice_no: str
    invoice_date: datetime = field(default_factory=datetime.now)
    check_in_time: datetime = field(default_factory=datetime.now)
    check_out_time: datetime = field(default_factory=datetime.now)
    customer: CustomerProfile = field(default_factory=CustomerProfile)
    items: List[LineItem] = field(default_factory=list)
    sub_total: Decimal = ZERO
    sgst: Decimal = ZERO
    cgst: Decimal = ZERO
    igst: Optional[Decimal] = None
    total: Decimal = ZERO
    amount_received: Decimal = ZERO
    balance: Decimal = ZERO
    payment_method: PaymentMethod = PaymentMethod.CASH
    terms: Optional[str] = None
    state: DocumentState = DocumentState.DRAFT

    @property
    def pdf_filename(self) -> str:
        return f"Invoice-{self.invoice_no}.pdf"

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, item_id: str) -> Optional[LineItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-friendly dictionary.

        Money is serialised as strings to keep exact decimal values.
        """
        return {
            'invoice_no': self.invoice_no,
            'invoice_date': self.invoice_date.isoformat(),
            'check_in_time': self.check_in_time.isoformat(),
            'check_out_time': self.check_out_time.isoformat(),
            'customer': self.customer.to_dict(),
            'items': [item.to_dict() for item in self.items],
            'sub_total': str(self.sub_total),
            'sgst': str(self.sgst),
            'cgst': str(self.cgst),
            'igst': None if self.igst is None else str(self.igst),
            'total': str(self.total),
            'amount_received': str(self.amount_received),
            'balance': str(self.balance),
            'payment_method': self.payment_method.value,
            'terms': self.terms,
            'state': self.state.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InvoiceRecord':
        """
        Create an InvoiceRecord from user-entered fields.

        Derived totals in the input are ignored; run the record through
        InvoiceSession to populate them.
        """
        now = datetime.now()
        return cls(
            invoice_no=str(data['invoice_no']),
            invoice_date=parse_timestamp(data.get('invoice_date')) or now,
            check_in_time=parse_timestamp(data.get('check_in_time')) or now,
            check_out_time=parse_timestamp(data.get('check_out_time')) or now,
            customer=CustomerProfile.from_dict(data.get('customer') or {}),
            items=[LineItem.from_dict(i) for i in data.get('items') or []],
            amount_received=to_decimal(data.get('amount_received', 0) or 0),
            payment_method=PaymentMethod.parse(data.get('payment_method', 'Cash')),
            terms=data.get('terms') or None,
        )

    def __repr__(self) -> str:
        return (
            f"InvoiceRecord("
            f"no={self.invoice_no}, "
            f"customer={self.customer.bill_to!r}, "
            f"items={len(self.items)}, "
            f"total={self.total})"
        )
