"""
Models module for XLS sheet data.

Plain dataclasses describing worksheet 0 as read from the source file:
cells, rows, shared styles, merged regions and floating pictures.
"""

from .image import AnchorPoint, Picture
from .sheet import Cell, MergedRegion, Row, Sheet, build_rows
from .style import BorderLines, CellStyle, FontSpec

__all__ = [
    "AnchorPoint",
    "BorderLines",
    "Cell",
    "CellStyle",
    "FontSpec",
    "MergedRegion",
    "Picture",
    "Row",
    "Sheet",
    "build_rows",
]
