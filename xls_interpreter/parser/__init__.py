"""
Parser module for legacy ``.xls`` workbooks.

Reads worksheet 0 through xlrd and the workbook's drawing records for
anchored pictures.
"""

from .drawing_parser import DrawingParser
from .xls_reader import XlsReader, load_sheet

__all__ = [
    "DrawingParser",
    "XlsReader",
    "load_sheet",
]
