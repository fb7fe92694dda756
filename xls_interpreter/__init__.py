"""
XLS Interpreter - legacy spreadsheet to PDF conversion library.

This package reads worksheet 0 of a binary ``.xls`` workbook and renders it
as a paginated, landscape PDF that keeps the sheet's look:

- Column widths scaled onto the page width, row heights and fonts alike
- Merged regions emitted once, by their anchor cell
- Fills, font color/weight/slant/underline, alignment and borders
- Floating pictures overlaid at their anchor cells

Main Components:
- Parser: xlrd-based sheet reader and drawing (picture) reader
- Models: Sheet, rows, cells, shared styles, merged regions, pictures
- Styles: Palette and style transcription
- Engine: Scale, merge resolution, layout and image placement
- Renderers: reportlab table, image overlay and PDF writer
- Utils: Enumerations and logging helpers
"""

__version__ = "1.0.0"
__author__ = "DocQuill Team"

from .api import XlsToPdfConverter, build_layout, convert_xls_to_pdf, load_sheet
from .config import ConvertOptions
from .engine.layout_engine import LayoutEngine
from .engine.layout_primitives import CellRecord, ImageDraw, SheetLayout
from .exceptions import (
    DegenerateSheetError,
    DocumentIOError,
    EmptySheetError,
    InvalidMergeRegionError,
    ParsingError,
    RenderingError,
    UnsupportedStyleError,
    XlsInterpreterError,
)
from .models import Cell, CellStyle, MergedRegion, Picture, Row, Sheet

__all__ = [
    "__version__",
    "Cell",
    "CellRecord",
    "CellStyle",
    "ConvertOptions",
    "DegenerateSheetError",
    "DocumentIOError",
    "EmptySheetError",
    "ImageDraw",
    "InvalidMergeRegionError",
    "LayoutEngine",
    "MergedRegion",
    "ParsingError",
    "Picture",
    "RenderingError",
    "Row",
    "Sheet",
    "SheetLayout",
    "UnsupportedStyleError",
    "XlsInterpreterError",
    "XlsToPdfConverter",
    "build_layout",
    "convert_xls_to_pdf",
    "load_sheet",
]
