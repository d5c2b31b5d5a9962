"""
Issuer Emblem.

The homestay mark drawn from primitives (two rings, a roof, a bed bar
and the brand wordmark) so the document needs no image asset.
"""

from gst_invoice.rendering.canvas import BLACK, BRAND_PINK, InvoiceCanvas

EMBLEM_SIZE = 30


def draw_emblem(canvas: InvoiceCanvas, x: float, y: float) -> None:
    """
    Draw the emblem in a 30 x 30 mm box with top-left corner (x, y).

    Leaves draw and text colours reset to black.
    """
    cx = x + EMBLEM_SIZE / 2
    cy = y + EMBLEM_SIZE / 2

    canvas.set_draw_color(BRAND_PINK)
    canvas.set_line_width(0.8)
    canvas.circle(cx, cy, 15)

    canvas.set_line_width(0.5)
    canvas.circle(cx, cy, 13)

    # roof
    canvas.set_line_width(0.8)
    canvas.line(x + 8, y + 10, cx, y + 5)
    canvas.line(cx, y + 5, x + 22, y + 10)

    # mattress
    canvas.set_fill_color(BRAND_PINK)
    canvas.rect(x + 10, y + 12, 10, 4, 'F')

    canvas.set_text_color(BRAND_PINK)
    canvas.text('VMP', cx, y + 21, size=10, style='bold', align='center')
    canvas.text('VILLA', cx, y + 26, size=7, style='bold', align='center')
    canvas.text('you feel comfortable', cx, y + 29, size=4, align='center')

    canvas.set_text_color(BLACK)
    canvas.set_draw_color(BLACK)
