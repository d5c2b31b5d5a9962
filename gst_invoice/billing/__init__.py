"""
Billing Module for the GST Invoice Generator.

This module provides:
    - GST component calculation (CGST/SGST vs IGST)
    - Invoice total aggregation with per-item rounding
    - The editing session that owns a live invoice record
    - Invoice number generation

Author: ML Engineering Team
"""

from .calculator import compute_tax, TaxBreakdown
from .aggregator import recompute, InvoiceTotals
from .identifier import generate_invoice_number
from .session import InvoiceSession

__all__ = [
    'compute_tax',
    'TaxBreakdown',
    'recompute',
    'InvoiceTotals',
    'generate_invoice_number',
    'InvoiceSession',
]
