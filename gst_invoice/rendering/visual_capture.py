"""
Visual-Capture Invoice Renderer.

Captures a visual surface as one raster image, scales it to the A4
width and slices it across as many pages as its height needs. Page n
shows the image shifted up by n page heights, so the slices line up
exactly when the pages are read in order.

Author: ML Engineering Team
"""

from typing import Optional, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader

from config import get_config
from gst_invoice.models.invoice import InvoiceRecord
from gst_invoice.rendering.base import DocumentRenderer, RenderedDocument, RenderOptions
from gst_invoice.rendering.canvas import InvoiceCanvas
from gst_invoice.rendering.surfaces import VisualSurface
from gst_invoice.utils.exceptions import SurfaceUnavailableError
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

# Overflow below this many mm is pixel rounding, not content
PAGE_SLACK_MM = 0.5


def flatten(image: Image.Image, background: str = "#ffffff") -> Image.Image:
    """Composite transparent pixels onto a solid background."""
    if image.mode == 'RGB':
        return image
    if image.mode in ('RGBA', 'LA') or (image.mode == 'P' and 'transparency' in image.info):
        rgba = image.convert('RGBA')
        base = Image.new('RGB', rgba.size, background)
        base.paste(rgba, mask=rgba.split()[3])
        return base
    return image.convert('RGB')


class VisualCaptureRenderer(DocumentRenderer):
    """
    Renders an invoice by capturing its visual surface.

    Attributes:
        surface: Surface to capture; None makes every render fail
        scale: Capture resolution multiplier
        background: Fill for transparent pixels

    Example:
        >>> surface = DocumentSurface(programmatic_doc.data)
        >>> renderer = VisualCaptureRenderer(surface)
        >>> doc = await renderer.render(record, RenderOptions(download=False))
    """

    mode = "visual"

    def __init__(
        self,
        surface: Optional[VisualSurface],
        scale: Optional[float] = None,
        background: Optional[str] = None
    ) -> None:
        self.surface = surface
        self.scale = float(scale or get_config("rendering.capture.scale", 2))
        self.background = background or get_config("rendering.capture.background", "#ffffff")

    def paginate(
        self,
        image: Image.Image,
        invoice: InvoiceRecord,
        auto_print: bool = False
    ) -> Tuple[bytes, int]:
        """
        Lay a captured image across A4 pages.

        Returns:
            (pdf_bytes, page_count)
        """
        image = flatten(image, self.background)
        canvas = InvoiceCanvas(
            title=f"Tax Invoice {invoice.invoice_no}",
            author=get_config("rendering.document.author", ""),
            subject="Tax Invoice",
        )

        img_width = canvas.width
        img_height = image.height * img_width / image.width
        reader = ImageReader(image)

        position = 0.0
        canvas.image(reader, 0, position, img_width, img_height)
        height_left = img_height - canvas.height

        while height_left > PAGE_SLACK_MM:
            position -= canvas.height
            canvas.add_page()
            canvas.image(reader, 0, position, img_width, img_height)
            height_left -= canvas.height

        if auto_print:
            canvas.enable_auto_print()

        page_count = canvas.page_count
        return canvas.finish(), page_count

    async def render(
        self,
        invoice: InvoiceRecord,
        options: Optional[RenderOptions] = None
    ) -> RenderedDocument:
        """
        Capture the surface and build the paginated document.

        Raises:
            SurfaceUnavailableError: If no surface was provided.
            CaptureError: If rasterization fails.
        """
        options = options or RenderOptions()

        if self.surface is None:
            raise SurfaceUnavailableError("No visual surface attached")

        logger.debug(f"Capturing {self.surface.name} at scale {self.scale}")
        image = await self.surface.capture(self.scale)

        data, page_count = self.paginate(image, invoice, auto_print=options.auto_print)
        return self._finalize(invoice, data, page_count, options)
