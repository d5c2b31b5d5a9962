"""
Export Module for the GST Invoice Generator.

This module provides the ExportHandler that coordinates local download,
printing and upload of a rendered invoice.

Author: ML Engineering Team
"""

from .handler import ExportHandler, MODES

__all__ = [
    'ExportHandler',
    'MODES',
]
