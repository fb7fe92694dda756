"""Rendering package providing PDF export of sheet layouts."""

from .base_renderer import BaseRenderer, IRenderer
from .image_renderer import ImageLayer, ImageRenderer, OverlayTable
from .pdf_renderer import PdfRenderer
from .table_renderer import TableRenderer

__all__ = [
    "BaseRenderer",
    "IRenderer",
    "ImageLayer",
    "ImageRenderer",
    "OverlayTable",
    "PdfRenderer",
    "TableRenderer",
]
