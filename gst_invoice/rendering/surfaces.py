"""
Visual Surfaces.

A visual surface is anything that can be rasterized into a single
image of the invoice as it appears on screen. Capture is asynchronous:
rasterization runs off the event loop and completes once, with no retry.

Available surfaces:
    - ImageSurface: an existing raster (PIL image or image file)
    - DocumentSurface: a rendered PDF, rasterized page by page with
      PyMuPDF and stacked into one tall image

Author: ML Engineering Team
"""

import asyncio
import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image

from config import get_config
from gst_invoice.utils.exceptions import CaptureError, SurfaceUnavailableError
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)


class VisualSurface(ABC):
    """Something that can be captured as a raster image."""

    name: str = "surface"

    async def capture(self, scale: float = 1.0) -> Image.Image:
        """
        Rasterize the surface.

        Args:
            scale: Resolution multiplier.

        Returns:
            RGB or RGBA PIL image.

        Raises:
            CaptureError: If rasterization fails.
        """
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._rasterize, scale)
        except (CaptureError, SurfaceUnavailableError):
            raise
        except Exception as e:
            logger.error(f"Capture of {self.name} failed: {e}")
            raise CaptureError(self.name, str(e)) from e

    @abstractmethod
    def _rasterize(self, scale: float) -> Image.Image:
        """Blocking rasterization, run in an executor."""


class ImageSurface(VisualSurface):
    """
    A surface backed by an existing image.

    Example:
        >>> surface = ImageSurface("screenshots/invoice.png")
        >>> image = await surface.capture(scale=2)
    """

    def __init__(self, source: Union[str, Path, Image.Image]) -> None:
        self.source = source
        self.name = source.name if isinstance(source, Path) else (
            str(source) if isinstance(source, str) else "image"
        )

    def _rasterize(self, scale: float) -> Image.Image:
        if isinstance(self.source, Image.Image):
            image = self.source.copy()
        else:
            path = Path(self.source)
            if not path.exists():
                raise SurfaceUnavailableError(f"Image not found: {path}")
            with Image.open(path) as img:
                image = img.copy()

        if scale != 1:
            size = (max(1, round(image.width * scale)), max(1, round(image.height * scale)))
            image = image.resize(size, Image.LANCZOS)
        return image


class DocumentSurface(VisualSurface):
    """
    A surface backed by PDF bytes.

    Every page is rendered with PyMuPDF at ``rendering.capture.dpi``
    times the capture scale, and the pages are stacked top to bottom.

    Attributes:
        pdf_bytes: Source document
        dpi: Base rasterization resolution
    """

    name = "document"

    def __init__(self, pdf_bytes: bytes, dpi: Optional[int] = None) -> None:
        if not pdf_bytes:
            raise SurfaceUnavailableError("Empty document")
        self.pdf_bytes = pdf_bytes
        self.dpi = dpi or get_config("rendering.capture.dpi", 144)
        self._check_dependencies()

    def _check_dependencies(self) -> None:
        try:
            import fitz  # PyMuPDF
            self._pymupdf = fitz
        except ImportError:
            raise ImportError(
                "PyMuPDF is required to rasterize documents. "
                "Install with: pip install PyMuPDF"
            )

    def _render_pages(self, scale: float) -> List[Image.Image]:
        zoom = self.dpi * scale / 72.0
        matrix = self._pymupdf.Matrix(zoom, zoom)
        pages = []

        doc = self._pymupdf.open(stream=self.pdf_bytes, filetype="pdf")
        try:
            for page in doc:
                pix = page.get_pixmap(matrix=matrix)
                image = Image.open(io.BytesIO(pix.tobytes("png")))
                if image.mode != 'RGB':
                    image = image.convert('RGB')
                pages.append(image)
        finally:
            doc.close()

        return pages

    def _rasterize(self, scale: float) -> Image.Image:
        pages = self._render_pages(scale)
        if not pages:
            raise SurfaceUnavailableError("Document has no pages")

        width = max(p.width for p in pages)
        height = sum(p.height for p in pages)
        sheet = Image.new('RGB', (width, height), 'white')

        y = 0
        for page in pages:
            sheet.paste(page, (0, y))
            y += page.height

        logger.debug(f"Rasterized {len(pages)} page(s) into {width}x{height}")
        return sheet
