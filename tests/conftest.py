"""Shared fixtures for the invoice generator tests."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import ConfigurationManager
from gst_invoice.billing.session import InvoiceSession
from gst_invoice.models.company import DEFAULT_COMPANY
from gst_invoice.models.invoice import CustomerProfile, InvoiceRecord


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from the bundled settings.yaml."""
    monkeypatch.delenv("GST_INVOICE_CONFIG", raising=False)
    ConfigurationManager.reset()
    yield ConfigurationManager()
    ConfigurationManager.reset()


@pytest.fixture
def company():
    return DEFAULT_COMPANY


@pytest.fixture
def fixed_moment():
    return datetime(2026, 10, 19, 14, 5)


@pytest.fixture
def make_session(company, fixed_moment):
    """Factory for a session with a fixed number and timestamps."""

    def _make(state="Uttar Pradesh", items=(), amount_received=0, invoice_no="VMP-19102026-0001"):
        record = InvoiceRecord(
            invoice_no=invoice_no,
            invoice_date=fixed_moment,
            check_in_time=fixed_moment,
            check_out_time=fixed_moment,
            customer=CustomerProfile(
                name="Anita Sharma",
                address="12 MG Road",
                city="Pune",
                state=state,
                pincode="411001",
                contact_no="9800000000",
            ),
        )
        session = InvoiceSession(record=record, company=company)
        for name, hsn, qty, price, rate in items:
            session.add_item(name, hsn, qty, price, rate)
        if amount_received:
            session.set_amount_received(amount_received)
        return session

    return _make


@pytest.fixture
def pdf_text():
    """Extract the text of every page of a PDF with PyMuPDF."""
    import fitz

    def _extract(data):
        doc = fitz.open(stream=data, filetype="pdf")
        try:
            return [page.get_text() for page in doc]
        finally:
            doc.close()

    return _extract
