"""
Input Module for the GST Invoice Generator.

This module provides:
    - Loading invoice definitions from YAML or JSON
    - Load-boundary validation of customer and item fields

Author: ML Engineering Team
"""

from .loader import load_invoice, read_definition, build_session
from .validators import InvoiceValidator, ItemValidator

__all__ = [
    'load_invoice',
    'read_definition',
    'build_session',
    'InvoiceValidator',
    'ItemValidator',
]
