"""
Main Export Handler Module.

This module provides the ExportHandler class that coordinates every way
an invoice leaves the editor: local download in either rendering mode,
printing, and upload to remote storage.

Author: ML Engineering Team
"""

from typing import Optional

from config import get_config
from gst_invoice.billing.session import InvoiceSession
from gst_invoice.rendering.base import RenderOptions, RenderedDocument
from gst_invoice.rendering.printing import Opener, print_invoice
from gst_invoice.rendering.programmatic import ProgrammaticRenderer
from gst_invoice.rendering.surfaces import DocumentSurface, VisualSurface
from gst_invoice.rendering.visual_capture import VisualCaptureRenderer
from gst_invoice.storage.service import InvoiceStorage, ListResult, UploadResult
from gst_invoice.utils.helpers import format_file_size
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

MODES = ("programmatic", "visual")


class ExportHandler:
    """
    Unified export handler for one invoice session.

    Renderers and storage are created on first use.

    Attributes:
        session: Session whose record is exported
        output_dir: Download directory override
        surface: Visual surface for capture and print. When None, the
                 programmatic rendering is rasterized and used instead.

    Example:
        >>> handler = ExportHandler(session)
        >>> document = await handler.download()          # programmatic
        >>> document = await handler.download("visual")
        >>> result = await handler.upload()
        >>> result.url
    """

    def __init__(
        self,
        session: InvoiceSession,
        output_dir: Optional[str] = None,
        surface: Optional[VisualSurface] = None,
        storage: Optional[InvoiceStorage] = None
    ) -> None:
        self.session = session
        self.output_dir = output_dir
        self.surface = surface

        self._storage = storage
        self._programmatic = None

        logger.debug(f"ExportHandler initialized for {session.record.invoice_no}")

    @property
    def programmatic(self) -> ProgrammaticRenderer:
        """Get or create the programmatic renderer."""
        if self._programmatic is None:
            self._programmatic = ProgrammaticRenderer(self.session.company)
        return self._programmatic

    @property
    def storage(self) -> InvoiceStorage:
        """Get or create the storage service."""
        if self._storage is None:
            self._storage = InvoiceStorage()
        return self._storage

    def _preview_surface(self) -> VisualSurface:
        if self.surface is not None:
            return self.surface
        data, _ = self.programmatic.draw(self.session.record)
        return DocumentSurface(data)

    async def download(
        self,
        mode: Optional[str] = None,
        filename: Optional[str] = None
    ) -> RenderedDocument:
        """
        Render the invoice and write it to the output directory.

        Args:
            mode: "programmatic" or "visual". Defaults to ``rendering.mode``.
            filename: Output filename. Defaults to Invoice-<invoiceNo>.pdf.

        Returns:
            The rendered document with ``path`` set.

        Raises:
            ValueError: For an unknown mode.
            RenderError: If rendering or writing fails.
        """
        mode = (mode or get_config("rendering.mode", "programmatic")).lower()
        options = RenderOptions(filename=filename, download=True, output_dir=self.output_dir)

        if mode == "programmatic":
            document = await self.programmatic.render(self.session.record, options)
        elif mode == "visual":
            renderer = VisualCaptureRenderer(self._preview_surface())
            document = await renderer.render(self.session.record, options)
        else:
            raise ValueError(f"Unknown rendering mode: {mode}. Expected one of {MODES}")

        self.session.mark_exported()
        logger.info(f"Downloaded {document.path} ({format_file_size(document.size)})")
        return document

    async def to_bytes(self) -> RenderedDocument:
        """Render programmatically in memory, without writing a file."""
        return await self.programmatic.render(
            self.session.record, RenderOptions(download=False)
        )

    async def print(
        self,
        opener: Optional[Opener] = None,
        temp_dir: Optional[str] = None
    ) -> RenderedDocument:
        """
        Open a print-flagged copy of the invoice in a viewer.

        Args:
            opener: Callable receiving the file URI.
            temp_dir: Directory for the print copy.
        """
        document = await print_invoice(
            self.session.record,
            self._preview_surface(),
            opener=opener,
            temp_dir=temp_dir,
        )
        self.session.mark_exported()
        return document

    async def upload(self) -> UploadResult:
        """
        Render programmatically and upload as Invoice-<invoiceNo>.pdf.

        Returns:
            UploadResult. Rendering errors propagate; storage errors come
            back as ``success=False``.
        """
        document = await self.to_bytes()
        result = await self.storage.upload(document.data, document.filename)

        if result.success:
            self.session.mark_exported()
            logger.info(f"Uploaded {result.pathname} -> {result.url}")
        else:
            logger.warning(f"Upload of {document.filename} failed: {result.error}")

        return result

    async def list_saved(self) -> ListResult:
        """List previously uploaded invoices, newest first."""
        return await self.storage.list_invoices()
