"""
Storage Module for the GST Invoice Generator.

This module provides:
    - The blob store contract and its in-memory and HTTP implementations
    - Invoice upload and listing with structured success/failure results

Author: ML Engineering Team
"""

from .blob_store import BlobInfo, BlobStore, InMemoryBlobStore, HttpBlobStore, create_blob_store
from .service import InvoiceStorage, UploadResult, ListResult, invoice_display_name

__all__ = [
    'BlobInfo',
    'BlobStore',
    'InMemoryBlobStore',
    'HttpBlobStore',
    'create_blob_store',
    'InvoiceStorage',
    'UploadResult',
    'ListResult',
    'invoice_display_name',
]
