"""
Invoice Storage Service.

Uploads generated PDFs to a blob store and lists previously saved ones.
Store failures never escape as exceptions: they come back as results
with ``success=False`` and an error message, and are not retried.

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import List, Optional

from dateutil import parser as date_parser

from gst_invoice.storage.blob_store import BlobInfo, BlobStore, create_blob_store
from gst_invoice.utils.exceptions import StorageError
from gst_invoice.utils.helpers import generate_timestamp, safe_filename
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

# invoice-YYYY-MM-DDTHH-MM-SS-mmmZ.pdf, as produced by timestamped uploads
TIMESTAMPED_NAME = re.compile(
    r"invoice-(\d{4})-(\d{2})-(\d{2})T(\d{2})-(\d{2})-(\d{2})", re.IGNORECASE
)


@dataclass
class UploadResult:
    """Outcome of an upload."""
    success: bool
    url: Optional[str] = None
    download_url: Optional[str] = None
    pathname: Optional[str] = None
    size: Optional[int] = None
    error: Optional[str] = None


@dataclass
class ListResult:
    """Outcome of listing saved invoices, newest first."""
    success: bool
    invoices: List[BlobInfo] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.invoices)


def timestamped_filename(now: Optional[datetime] = None) -> str:
    """Fallback upload name, e.g. invoice-2026-10-19T14-05-09-123Z.pdf."""
    now = now or datetime.now(timezone.utc)
    stamp = generate_timestamp("%Y-%m-%dT%H-%M-%S", now)
    return f"invoice-{stamp}-{now.microsecond // 1000:03d}Z.pdf"


def invoice_display_name(pathname: str) -> str:
    """
    Friendly name for a stored invoice.

    Timestamped uploads read "Invoice - 19 Oct 2026, 02:05 PM"; anything
    else is the file name without its .pdf extension.

    Example:
        >>> invoice_display_name("Invoice-VMP-19102026-0417.pdf")
        "Invoice-VMP-19102026-0417"
    """
    filename = PurePosixPath(pathname).name
    match = TIMESTAMPED_NAME.search(filename)

    if match:
        year, month, day, hour, minute, second = (int(g) for g in match.groups())
        moment = datetime(year, month, day, hour, minute, second)
        return f"Invoice - {moment.strftime('%d %b %Y, %I:%M %p')}"

    if filename.lower().endswith('.pdf'):
        return filename[:-4]
    return filename


def _uploaded_at(blob: BlobInfo) -> datetime:
    """Sort key: upload time in UTC, unknown times last."""
    if not blob.uploaded_at:
        return datetime.min.replace(tzinfo=timezone.utc)
    try:
        moment = date_parser.isoparse(blob.uploaded_at)
    except (ValueError, OverflowError):
        logger.warning(f"Unreadable upload time for {blob.pathname}: {blob.uploaded_at!r}")
        return datetime.min.replace(tzinfo=timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class InvoiceStorage:
    """
    Remote persistence for generated invoices.

    Attributes:
        store: Underlying blob store

    Example:
        >>> storage = InvoiceStorage(InMemoryBlobStore())
        >>> result = await storage.upload(doc.data, doc.filename)
        >>> result.success
        True
    """

    def __init__(self, store: Optional[BlobStore] = None) -> None:
        self.store = store or create_blob_store()
        logger.debug(f"InvoiceStorage initialized ({type(self.store).__name__})")

    async def upload(self, data: bytes, filename: Optional[str] = None) -> UploadResult:
        """
        Upload PDF bytes.

        Args:
            data: Document bytes.
            filename: Key to store under. Defaults to a timestamped name.

        Returns:
            UploadResult; ``success`` is False with ``error`` set on failure.
        """
        key = safe_filename(filename) if filename else timestamped_filename()

        try:
            info = await self.store.put(key, data, PDF_CONTENT_TYPE)
        except StorageError as e:
            logger.error(f"Upload error: {e}")
            return UploadResult(success=False, error=e.details.get('reason') or e.message)

        return UploadResult(
            success=True,
            url=info.url,
            download_url=info.download_url,
            pathname=info.pathname,
            size=info.size,
        )

    async def list_invoices(self) -> ListResult:
        """
        List saved PDFs, newest first.

        Returns:
            ListResult; ``success`` is False with ``error`` set on failure.
        """
        try:
            blobs = await self.store.list()
        except StorageError as e:
            logger.error(f"List error: {e}")
            return ListResult(success=False, error=e.details.get('reason') or e.message)

        invoices = [b for b in blobs if b.pathname.endswith('.pdf')]
        invoices.sort(key=_uploaded_at, reverse=True)

        return ListResult(success=True, invoices=invoices)
