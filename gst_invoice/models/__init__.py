"""
Data Model Module for the GST Invoice Generator.

Author: ML Engineering Team
"""

from .invoice import (
    LineItem,
    CustomerProfile,
    InvoiceRecord,
    PaymentMethod,
    DocumentState,
)
from .company import CompanyProfile, DEFAULT_COMPANY, load_company_profile
from .localities import STATE_CODES, HSN_CODES, GST_RATES, is_cross_locality

__all__ = [
    'LineItem',
    'CustomerProfile',
    'InvoiceRecord',
    'PaymentMethod',
    'DocumentState',
    'CompanyProfile',
    'DEFAULT_COMPANY',
    'load_company_profile',
    'STATE_CODES',
    'HSN_CODES',
    'GST_RATES',
    'is_cross_locality',
]
