"""
Top-Down Drawing Surface.

ReportLab measures in points from the bottom-left corner. Invoice
geometry is easier to read in millimetres from the top, so InvoiceCanvas
wraps a ReportLab canvas and converts every coordinate. PageCursor
tracks the vertical write position and starts a new page when a block
would cross the printable bottom edge.

Author: ML Engineering Team
"""

import io
from typing import Callable, List, Optional, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfdoc import PDFDictionary, PDFName
from reportlab.pdfgen import canvas as rl_canvas

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
LIGHT_GREY: Color = (240, 240, 240)
BRAND_PINK: Color = (233, 30, 140)
LIGHT_PINK: Color = (252, 231, 243)

FONTS = {
    'normal': 'Helvetica',
    'bold': 'Helvetica-Bold',
    'italic': 'Helvetica-Oblique',
}

PAGE_WIDTH_MM = A4[0] / mm
PAGE_HEIGHT_MM = A4[1] / mm


def _rgb(color: Color):
    return color[0] / 255.0, color[1] / 255.0, color[2] / 255.0


class InvoiceCanvas:
    """
    A4 drawing surface addressed in mm from the top-left corner.

    Attributes:
        buffer: In-memory PDF output
        page_count: Pages started so far (the current page included)

    Example:
        >>> c = InvoiceCanvas(title="Tax Invoice")
        >>> c.text("Hello", 10, 20, size=12, style="bold")
        >>> data = c.finish()
    """

    def __init__(
        self,
        title: str = "",
        author: str = "",
        subject: str = "",
        invariant: bool = True
    ) -> None:
        self.buffer = io.BytesIO()
        self._canvas = rl_canvas.Canvas(
            self.buffer,
            pagesize=A4,
            invariant=1 if invariant else 0,
            pageCompression=0,
        )
        self._canvas.setTitle(title)
        self._canvas.setAuthor(author)
        self._canvas.setSubject(subject)
        self._canvas.setCreator("gst-invoice")
        self.page_count = 1
        self._fill: Color = BLACK
        self._text_color: Color = BLACK

    @property
    def width(self) -> float:
        return PAGE_WIDTH_MM

    @property
    def height(self) -> float:
        return PAGE_HEIGHT_MM

    @property
    def raw(self) -> rl_canvas.Canvas:
        return self._canvas

    def _y(self, y_mm: float) -> float:
        return (PAGE_HEIGHT_MM - y_mm) * mm

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def set_line_width(self, width_mm: float) -> None:
        self._canvas.setLineWidth(width_mm * mm)

    def set_draw_color(self, color: Color) -> None:
        self._canvas.setStrokeColorRGB(*_rgb(color))

    def set_fill_color(self, color: Color) -> None:
        self._fill = color

    def set_text_color(self, color: Color) -> None:
        self._text_color = color

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def text(
        self,
        text: str,
        x: float,
        y: float,
        size: float = 10,
        style: str = 'normal',
        align: str = 'left'
    ) -> None:
        """Draw a single line with its baseline at (x, y)."""
        c = self._canvas
        c.setFont(FONTS[style], size)
        c.setFillColorRGB(*_rgb(self._text_color))

        if align == 'center':
            c.drawCentredString(x * mm, self._y(y), text)
        elif align == 'right':
            c.drawRightString(x * mm, self._y(y), text)
        else:
            c.drawString(x * mm, self._y(y), text)

    def rect(self, x: float, y: float, w: float, h: float, style: str = 'S') -> None:
        """
        Rectangle with its top-left corner at (x, y).

        Args:
            style: 'S' stroke, 'F' fill, 'FD' both.
        """
        c = self._canvas
        c.setFillColorRGB(*_rgb(self._fill))
        c.rect(
            x * mm,
            self._y(y + h),
            w * mm,
            h * mm,
            stroke=1 if 'S' in style or 'D' in style else 0,
            fill=1 if 'F' in style else 0,
        )

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def circle(self, cx: float, cy: float, r: float, style: str = 'S') -> None:
        c = self._canvas
        c.setFillColorRGB(*_rgb(self._fill))
        c.circle(
            cx * mm,
            self._y(cy),
            r * mm,
            stroke=1 if 'S' in style or 'D' in style else 0,
            fill=1 if 'F' in style else 0,
        )

    def image(self, reader, x: float, y: float, w: float, h: float) -> None:
        """Place an image with its top-left corner at (x, y); y may be negative."""
        self._canvas.drawImage(reader, x * mm, self._y(y + h), w * mm, h * mm)

    # ------------------------------------------------------------------
    # Text measurement
    # ------------------------------------------------------------------

    def split_text(self, text: str, width: float, size: float = 10, style: str = 'normal') -> List[str]:
        """Wrap text to lines no wider than width mm."""
        lines = simpleSplit(text, FONTS[style], size, width * mm)
        return lines or ['']

    # ------------------------------------------------------------------
    # Pages and output
    # ------------------------------------------------------------------

    def add_page(self) -> None:
        self._canvas.showPage()
        self.page_count += 1

    def enable_auto_print(self) -> None:
        """Ask the viewer to open its print dialog when the file opens."""
        self._canvas.setCatalogEntry(
            'OpenAction',
            PDFDictionary({'S': PDFName('Named'), 'N': PDFName('Print')}),
        )

    def finish(self) -> bytes:
        """Close the document and return its bytes."""
        self._canvas.showPage()
        self._canvas.save()
        return self.buffer.getvalue()


class PageCursor:
    """
    Vertical write position with the page-overflow rule.

    Content is laid out top-down from the top margin. When a block of a
    given height would end below the printable bottom, a new page is
    started, ``on_new_page`` runs (frame redraw, header restatement) and
    the position continues from the new page's top margin.

    Attributes:
        y: Current position in mm from the page top
        top: First writable y on every page
        bottom: Last writable y on every page
    """

    def __init__(
        self,
        canvas: InvoiceCanvas,
        top: float,
        bottom: float,
        on_new_page: Optional[Callable[[], None]] = None
    ) -> None:
        self.canvas = canvas
        self.top = top
        self.bottom = bottom
        self.y = top
        self.on_new_page = on_new_page

    @property
    def remaining(self) -> float:
        return self.bottom - self.y

    def fits(self, height: float) -> bool:
        return self.y + height <= self.bottom

    def ensure(self, height: float) -> bool:
        """
        Make room for a block of ``height`` mm.

        Returns:
            True if a new page was started.
        """
        if self.fits(height) or self.y <= self.top:
            return False

        self.canvas.add_page()
        self.y = self.top
        if self.on_new_page is not None:
            self.on_new_page()
        return True

    def advance(self, delta: float) -> float:
        self.y += delta
        return self.y

    def move_to(self, y: float) -> float:
        self.y = y
        return self.y


def column_positions(start: float, widths: Sequence[float]) -> List[float]:
    """Left x of each column given the table's left edge and column widths."""
    positions = []
    x = start
    for width in widths:
        positions.append(x)
        x += width
    return positions
