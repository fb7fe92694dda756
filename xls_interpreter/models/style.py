"""Style model for XLS cells.

Styles are shared: a sheet keeps one table of :class:`CellStyle` entries
indexed by XF id and every cell refers to an entry by index.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..utils.enums import SourceHorizontal, SourceVertical

AUTOMATIC_COLOR_INDEX = 64
FONT_AUTOMATIC_INDEX = 0x7FFF
DEFAULT_FONT_HEIGHT = 200  # 10pt in twips

UNDERLINE_NONE = 0
UNDERLINE_SINGLE = 1


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Font record referenced by a style."""

    height: int = DEFAULT_FONT_HEIGHT
    bold: bool = False
    italic: bool = False
    underline: int = UNDERLINE_NONE
    color_index: int = FONT_AUTOMATIC_INDEX


@dataclass(frozen=True, slots=True)
class BorderLines:
    """Line style code per side; 0 means no line."""

    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0


@dataclass(frozen=True, slots=True)
class CellStyle:
    """Visual attributes of an XF record."""

    fill_color_index: int = AUTOMATIC_COLOR_INDEX
    font: FontSpec = field(default_factory=FontSpec)
    horizontal: SourceHorizontal = SourceHorizontal.GENERAL
    vertical: SourceVertical = SourceVertical.BOTTOM
    borders: BorderLines = field(default_factory=BorderLines)
