"""
GST Invoice Generator - Source Package.

This package contains the core modules for producing GST tax invoices
for a homestay: tax calculation, invoice aggregation, amount-in-words
formatting, PDF layout and remote storage of generated documents.

Modules:
    - models: Line items, customer profile, invoice record, localities
    - formatting: Amount in words, grouped currency, dates
    - billing: Tax calculator, aggregator, identifier, editing session
    - rendering: Programmatic and visual-capture PDF renderers, print
    - io: Invoice definition loading and validation
    - storage: Blob store and invoice upload/list service
    - export: Download, print and upload coordination
    - utils: Logging, exceptions, helpers

Architecture:
    Input → Session (Calculator → Aggregator) → Renderer → Download
                                                         ↓
                                                   Print / Storage
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'models',
    'formatting',
    'billing',
    'rendering',
    'io',
    'storage',
    'export',
    'utils'
]
