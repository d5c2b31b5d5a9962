"""
Rendering Module for the GST Invoice Generator.

This module provides two interchangeable strategies for turning an
InvoiceRecord into an A4 PDF:
    - ProgrammaticRenderer: draws every element at explicit coordinates
      (reproducible bytes, in-memory output for upload)
    - VisualCaptureRenderer: rasterizes a visual surface and slices it
      across pages

and the print operation built on visual capture.

Author: ML Engineering Team
"""

from .base import DocumentRenderer, RenderOptions, RenderedDocument, save_document
from .programmatic import ProgrammaticRenderer
from .surfaces import VisualSurface, ImageSurface, DocumentSurface
from .visual_capture import VisualCaptureRenderer
from .printing import print_invoice

__all__ = [
    'DocumentRenderer',
    'RenderOptions',
    'RenderedDocument',
    'save_document',
    'ProgrammaticRenderer',
    'VisualSurface',
    'ImageSurface',
    'DocumentSurface',
    'VisualCaptureRenderer',
    'print_invoice',
]
