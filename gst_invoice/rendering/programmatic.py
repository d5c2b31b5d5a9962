"""
Programmatic Invoice Renderer.

Draws every element of the tax invoice (text, rules, filled bands,
circles) at explicit coordinates on A4 pages. The output depends only on
the InvoiceRecord and the issuer profile: the same record always yields
the same bytes, so the result can be uploaded straight from memory.

Sections, top to bottom:
    page frame, issuer header with emblem, title banner, customer and
    invoice details, line-item table, totals banner, amount in words
    beside the tax breakdown, terms, signature.

Author: ML Engineering Team
"""

from decimal import Decimal
from typing import List, Optional, Tuple

from config import get_config
from gst_invoice.formatting.currency import format_amount
from gst_invoice.formatting.dates import format_date, format_datetime
from gst_invoice.formatting.words import amount_to_words
from gst_invoice.models.company import CompanyProfile, load_company_profile
from gst_invoice.models.invoice import InvoiceRecord
from gst_invoice.models.localities import is_cross_locality
from gst_invoice.rendering.base import DocumentRenderer, RenderedDocument, RenderOptions
from gst_invoice.rendering.canvas import (
    BLACK,
    BRAND_PINK,
    LIGHT_GREY,
    LIGHT_PINK,
    InvoiceCanvas,
    PageCursor,
    column_positions,
)
from gst_invoice.rendering.emblem import EMBLEM_SIZE, draw_emblem
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

# ===== Layout constants (mm) =====
HEADER_HEIGHT = 35
TITLE_BAND_HEIGHT = 12
TABLE_HEADER_HEIGHT = 8
ROW_HEIGHT = 7
WRAPPED_LINE_HEIGHT = 4
TOTALS_BAND_HEIGHT = 10
DETAIL_WRAP_WIDTH = 100
SIGNATURE_OFFSET = 15

TABLE_COLUMNS: Tuple[Tuple[str, float], ...] = (
    ('#', 10),
    ('Item name', 50),
    ('HSN Code', 25),
    ('Qty.', 15),
    ('Price/Unit', 25),
    ('GST', 15),
    ('Amount', 25),
)

NO_ITEMS_TEXT = "No items added"


def format_rate(rate: Decimal) -> str:
    """GST rate as a percentage label: 12 -> '12%', 2.5 -> '2.5%'."""
    normalized = rate.normalize()
    if normalized == normalized.to_integral_value():
        return f"{int(normalized)}%"
    return f"{normalized}%"


class _InvoiceLayout:
    """One pass of drawing an invoice onto a canvas."""

    def __init__(
        self,
        canvas: InvoiceCanvas,
        invoice: InvoiceRecord,
        company: CompanyProfile,
        margin: float,
        signature_label: str
    ) -> None:
        self.c = canvas
        self.invoice = invoice
        self.company = company
        self.margin = margin
        self.signature_label = signature_label
        self.content_width = canvas.width - 2 * margin
        self.right_edge = canvas.width - margin - 5
        self.cross_state = is_cross_locality(invoice.customer.state, company.state)
        self.columns = column_positions(margin + 2, [w for _, w in TABLE_COLUMNS])
        self._in_table = False
        self.cursor = PageCursor(
            canvas,
            top=margin + 5,
            bottom=canvas.height - margin - 5,
            on_new_page=self._on_new_page,
        )

    # ------------------------------------------------------------------

    def draw(self) -> None:
        self._frame()
        self._header()
        self._title()
        self._details()
        self._table()
        self._totals_band()
        self._summary()
        self._terms()
        self._signature()

    def _on_new_page(self) -> None:
        self._frame()
        if self._in_table:
            self._table_header()

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _frame(self) -> None:
        c = self.c
        c.set_draw_color(BLACK)
        c.set_line_width(0.5)
        c.rect(self.margin, self.margin, self.content_width, c.height - 2 * self.margin)

    def _header(self) -> None:
        c, m, company = self.c, self.margin, self.company
        top = self.cursor.y

        c.set_fill_color(LIGHT_GREY)
        c.rect(m, top, self.content_width, HEADER_HEIGHT, 'F')

        x = m + 5
        y = top + 7
        c.text(company.name, x, y, size=12, style='bold')

        lines = [
            f"Address: {company.address}",
            f"Phone No: {company.phone}",
            f"Email ID: {company.email}",
            f"GSTIN: {company.gstin}",
            f"State: {company.state_code}-{company.state}",
        ]
        y += 1
        for line in lines:
            y += 5
            c.text(line, x, y, size=9)

        draw_emblem(c, c.width - m - EMBLEM_SIZE, m + 7)
        self.cursor.move_to(top + HEADER_HEIGHT + 6)

    def _title(self) -> None:
        c = self.c
        top = self.cursor.y

        c.set_fill_color(LIGHT_PINK)
        c.rect(self.margin, top, self.content_width, TITLE_BAND_HEIGHT, 'F')
        c.set_text_color(BRAND_PINK)
        c.text('Tax Invoice', c.width / 2, top + 8, size=18, style='bold', align='center')
        c.set_text_color(BLACK)

        self.cursor.move_to(top + TITLE_BAND_HEIGHT + 6)

    def _customer_lines(self) -> List[Tuple[str, float, str, float]]:
        """(text, size, style, advance) rows of the left details column."""
        c, customer = self.c, self.invoice.customer
        rows = [(f"Bill To: {customer.bill_to}", 10, 'bold', 5)]

        if customer.company_name:
            rows.append((f"Name: {customer.name}", 9, 'normal', 5))

        address = c.split_text(f"Address: {customer.full_address}", DETAIL_WRAP_WIDTH, 9)
        for i, line in enumerate(address):
            rows.append((line, 9, 'normal', 6 if i == len(address) - 1 else WRAPPED_LINE_HEIGHT))

        rows.append((f"Contact No.: {customer.contact_no}", 9, 'normal', 5))

        if customer.gstin:
            rows.append((f"GSTIN No.: {customer.gstin}", 9, 'normal', 5))

        if customer.state:
            label = customer.state
            if customer.state_code:
                label = f"{customer.state_code}-{customer.state}"
            rows.append((f"State: {label}", 9, 'normal', 5))

        return rows

    def _invoice_lines(self) -> List[Tuple[str, float, str, float]]:
        inv = self.invoice
        return [
            (f"Check-in Time: {format_datetime(inv.check_in_time)}", 9, 'normal', 5),
            (f"Check-out Time: {format_datetime(inv.check_out_time)}", 9, 'normal', 7),
            (f"Invoice No.: {inv.invoice_no}", 10, 'bold', 5),
            (f"Date: {format_date(inv.invoice_date)}", 10, 'bold', 5),
        ]

    def _details(self) -> None:
        c = self.c
        left = self._customer_lines()
        right = self._invoice_lines()

        block = max(sum(r[3] for r in left), sum(r[3] for r in right))
        self.cursor.ensure(block)
        top = self.cursor.y

        y = top
        for text, size, style, advance in left:
            c.text(text, self.margin + 5, y, size=size, style=style)
            y += advance
        left_end = y

        y = top
        for text, size, style, advance in right:
            c.text(text, self.right_edge, y, size=size, style=style, align='right')
            y += advance

        self.cursor.move_to(max(left_end, y) + 5)

    def _table_header(self) -> None:
        c = self.c
        y = self.cursor.y
        c.set_fill_color(LIGHT_GREY)
        c.rect(self.margin, y, self.content_width, TABLE_HEADER_HEIGHT, 'F')
        for (label, _), x in zip(TABLE_COLUMNS, self.columns):
            c.text(label, x, y + 5, size=9, style='bold')
        self.cursor.advance(TABLE_HEADER_HEIGHT)

    def _table(self) -> None:
        c = self.c
        self.cursor.ensure(TABLE_HEADER_HEIGHT + ROW_HEIGHT)
        self._table_header()
        self._in_table = True

        if not self.invoice.items:
            y = self.cursor.y
            c.text(NO_ITEMS_TEXT, c.width / 2, y + 5, size=9, style='italic', align='center')
            self.cursor.advance(ROW_HEIGHT)

        name_width = TABLE_COLUMNS[1][1] - 2
        for index, item in enumerate(self.invoice.items, start=1):
            name_lines = c.split_text(item.name, name_width, 9)
            row_height = ROW_HEIGHT + WRAPPED_LINE_HEIGHT * (len(name_lines) - 1)
            self.cursor.ensure(row_height)
            y = self.cursor.y + 5

            cells = [
                str(index),
                None,
                item.hsn_code,
                str(item.quantity),
                format_amount(item.unit_price),
                format_rate(item.gst_rate),
                format_amount(item.amount),
            ]
            for cell, x in zip(cells, self.columns):
                if cell is not None:
                    c.text(cell, x, y, size=9)
            for offset, line in enumerate(name_lines):
                c.text(line, self.columns[1], y + offset * WRAPPED_LINE_HEIGHT, size=9)

            self.cursor.advance(row_height)

        self._in_table = False

    def _totals_band(self) -> None:
        c, m, inv = self.c, self.margin, self.invoice
        self.cursor.advance(3)
        self.cursor.ensure(TOTALS_BAND_HEIGHT)
        top = self.cursor.y

        c.set_fill_color(LIGHT_PINK)
        c.rect(m, top, self.content_width, TOTALS_BAND_HEIGHT, 'F')

        widths = [w for _, w in TABLE_COLUMNS]
        y = top + 6
        c.text('Total', m + 20, y, size=11, style='bold')
        c.text(str(inv.total_quantity), m + sum(widths[:3]) + 5, y, size=11, style='bold')
        c.text(format_amount(inv.sub_total), m + sum(widths[:5]), y, size=11, style='bold')
        c.text(format_amount(inv.total), c.width - m - 30, y, size=11, style='bold')

        self.cursor.move_to(top + TOTALS_BAND_HEIGHT + 5)

    def _breakdown_rows(self) -> List[Tuple[str, str, str]]:
        """(label, value, style) rows of the right summary column."""
        inv = self.invoice
        rows = [('Sub Total:', format_amount(inv.sub_total), 'bold')]

        if self.cross_state:
            rows.append(('IGST', format_amount(inv.igst or 0), 'normal'))
        else:
            rows.append(('SGST', format_amount(inv.sgst), 'normal'))
            rows.append(('CGST', format_amount(inv.cgst), 'normal'))

        rows.extend([
            ('Total', format_amount(inv.total), 'bold'),
            ('Payment Type', inv.payment_method.value, 'bold'),
            ('Received', format_amount(inv.amount_received), 'normal'),
            ('Balance', format_amount(inv.balance), 'bold'),
        ])
        return rows

    def _summary(self) -> None:
        c = self.c
        words = c.split_text(amount_to_words(self.invoice.total), DETAIL_WRAP_WIDTH, 9)
        rows = self._breakdown_rows()

        left_height = 5 + 5 * len(words)
        right_height = 6 + 5 * (len(rows) - 1)
        self.cursor.ensure(max(left_height, right_height) + 5)
        top = self.cursor.y

        c.text('Amount in words:', self.margin + 5, top, size=10, style='bold')
        y = top + 5
        for line in words:
            c.text(line, self.margin + 5, y, size=9)
            y += 5
        left_end = y

        label_x = c.width - self.margin - 60
        y = top
        c.set_fill_color(LIGHT_PINK)
        c.rect(label_x - 5, y - 5, 65, 8, 'F')
        for i, (label, value, style) in enumerate(rows):
            label_style = style if i == 0 or label in ('Total', 'Balance') else 'normal'
            size = 10 if i == 0 or label == 'Total' else 9
            c.text(label, label_x, y, size=size, style=label_style)
            c.text(value, self.right_edge, y, size=size, style=style, align='right')
            y += 6 if i == 0 else 5

        self.cursor.move_to(max(left_end, y) + 5)

    def _terms(self) -> None:
        c = self.c
        lines = []
        if self.invoice.terms:
            for paragraph in self.invoice.terms.splitlines():
                lines.extend(c.split_text(paragraph, self.content_width - 10, 9))

        # heading stays with its first line
        self.cursor.ensure(5 + WRAPPED_LINE_HEIGHT * min(len(lines), 1))
        c.text('Terms & Conditions', self.margin + 5, self.cursor.y, size=10, style='bold')
        self.cursor.advance(5)

        for line in lines:
            self.cursor.ensure(WRAPPED_LINE_HEIGHT)
            c.text(line, self.margin + 5, self.cursor.y, size=9)
            self.cursor.advance(WRAPPED_LINE_HEIGHT)

    def _signature(self) -> None:
        c = self.c
        y = c.height - self.margin - SIGNATURE_OFFSET
        if self.cursor.y > y - 10:
            c.add_page()
            self._frame()

        c.set_line_width(0.3)
        c.line(self.right_edge - 55, y - 6, self.right_edge, y - 6)
        c.text(self.signature_label, self.right_edge, y, size=10, align='right')


class ProgrammaticRenderer(DocumentRenderer):
    """
    Draws invoices directly with ReportLab.

    Attributes:
        company: Issuer profile printed in the header
        margin: Page margin in mm

    Example:
        >>> renderer = ProgrammaticRenderer()
        >>> doc = renderer.build(record, RenderOptions(download=False))
        >>> doc.data[:4]
        b'%PDF'
    """

    mode = "programmatic"

    def __init__(self, company: Optional[CompanyProfile] = None) -> None:
        self.company = company or load_company_profile()
        self.margin = float(get_config("rendering.margin_mm", 10))
        self.title = get_config("rendering.document.title", "Tax Invoice")
        self.author = get_config("rendering.document.author", self.company.name)
        self.signature_label = get_config(
            "rendering.document.signature_label", "Company seal and Sign"
        )
        logger.debug(f"ProgrammaticRenderer initialized (margin={self.margin}mm)")

    def draw(self, invoice: InvoiceRecord, auto_print: bool = False) -> Tuple[bytes, int]:
        """
        Draw the invoice and return (pdf_bytes, page_count).
        """
        canvas = InvoiceCanvas(
            title=f"{self.title} {invoice.invoice_no}",
            author=self.author,
            subject=self.title,
        )
        _InvoiceLayout(canvas, invoice, self.company, self.margin, self.signature_label).draw()

        if auto_print:
            canvas.enable_auto_print()

        page_count = canvas.page_count
        return canvas.finish(), page_count

    def build(
        self,
        invoice: InvoiceRecord,
        options: Optional[RenderOptions] = None
    ) -> RenderedDocument:
        """
        Render synchronously.

        Args:
            invoice: Fully aggregated invoice.
            options: Rendering options; ``download=False`` returns bytes
                     without touching the filesystem.

        Returns:
            RenderedDocument.
        """
        options = options or RenderOptions()
        data, page_count = self.draw(invoice, auto_print=options.auto_print)
        return self._finalize(invoice, data, page_count, options)

    async def render(
        self,
        invoice: InvoiceRecord,
        options: Optional[RenderOptions] = None
    ) -> RenderedDocument:
        return self.build(invoice, options)
