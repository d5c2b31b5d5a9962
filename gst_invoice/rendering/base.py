"""
Document Renderer Interface.

Both rendering strategies take the same InvoiceRecord and produce the
same RenderedDocument, so callers choose a strategy without changing
anything else.

Author: ML Engineering Team
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import get_config
from gst_invoice.models.invoice import InvoiceRecord
from gst_invoice.utils.exceptions import DocumentWriteError
from gst_invoice.utils.helpers import ensure_directory, safe_filename
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RenderOptions:
    """
    Per-call rendering options.

    Attributes:
        filename: Output filename. Defaults to Invoice-<invoiceNo>.pdf
        download: Write the file to the output directory
        output_dir: Directory for downloads. Defaults to ``paths.output_dir``
        auto_print: Flag the document to open the print dialog
    """
    filename: Optional[str] = None
    download: bool = True
    output_dir: Optional[str] = None
    auto_print: bool = False


@dataclass
class RenderedDocument:
    """
    A finished PDF.

    Attributes:
        filename: Suggested filename
        data: Raw PDF bytes
        page_count: Number of A4 pages
        path: Where the file was written, when downloaded
    """
    filename: str
    data: bytes
    page_count: int
    path: Optional[Path] = None

    @property
    def size(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return (
            f"RenderedDocument(filename='{self.filename}', "
            f"pages={self.page_count}, size={self.size})"
        )


class DocumentRenderer(ABC):
    """Common contract of the programmatic and visual-capture renderers."""

    mode: str = ""

    @abstractmethod
    async def render(
        self,
        invoice: InvoiceRecord,
        options: Optional[RenderOptions] = None
    ) -> RenderedDocument:
        """Render an invoice to PDF."""

    def _finalize(
        self,
        invoice: InvoiceRecord,
        data: bytes,
        page_count: int,
        options: RenderOptions
    ) -> RenderedDocument:
        filename = safe_filename(options.filename or invoice.pdf_filename)
        document = RenderedDocument(filename=filename, data=data, page_count=page_count)

        if options.download:
            document.path = save_document(document, options.output_dir)

        logger.info(
            f"Rendered {invoice.invoice_no} ({self.mode}): "
            f"{page_count} page(s), {len(data)} bytes"
        )
        return document


def save_document(document: RenderedDocument, output_dir: Optional[str] = None) -> Path:
    """
    Write a rendered document to disk.

    Raises:
        DocumentWriteError: If the file cannot be written.
    """
    out_dir = Path(output_dir or get_config("paths.output_dir", "outputs"))
    filepath = out_dir / document.filename

    try:
        ensure_directory(out_dir)
        filepath.write_bytes(document.data)
    except OSError as e:
        raise DocumentWriteError(str(filepath), str(e)) from e

    logger.info(f"Saved {filepath}")
    return filepath
