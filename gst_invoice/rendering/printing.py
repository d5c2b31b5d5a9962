"""
Invoice Printing.

Printing reuses visual capture: the captured document is flagged to open
the print dialog, written to a temporary file and handed to a viewer.
"""

import tempfile
import webbrowser
from pathlib import Path
from typing import Callable, Optional

from config import get_config
from gst_invoice.models.invoice import InvoiceRecord
from gst_invoice.rendering.base import RenderOptions, RenderedDocument, save_document
from gst_invoice.rendering.surfaces import VisualSurface
from gst_invoice.rendering.visual_capture import VisualCaptureRenderer
from gst_invoice.utils.logger import get_logger

logger = get_logger(__name__)

Opener = Callable[[str], object]


async def print_invoice(
    invoice: InvoiceRecord,
    surface: Optional[VisualSurface],
    opener: Optional[Opener] = None,
    temp_dir: Optional[str] = None
) -> RenderedDocument:
    """
    Capture, flag for printing and open the invoice in a new viewer.

    Args:
        invoice: Invoice being printed (supplies the filename).
        surface: Visual surface to capture.
        opener: Callable receiving the file URI. Defaults to
                webbrowser.open.
        temp_dir: Where the print copy is written. Defaults to
                  ``paths.temp_dir`` or the system temp directory.

    Returns:
        The printed document, with ``path`` set to the temporary file.
    """
    renderer = VisualCaptureRenderer(surface)
    document = await renderer.render(
        invoice,
        RenderOptions(download=False, auto_print=True),
    )

    target_dir = temp_dir or get_config("paths.temp_dir") or tempfile.gettempdir()
    document.path = save_document(document, target_dir)

    uri = Path(document.path).resolve().as_uri()
    (opener or webbrowser.open)(uri)
    logger.info(f"Opened {document.filename} for printing")

    return document
