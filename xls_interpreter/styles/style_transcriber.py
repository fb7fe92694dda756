"""
Style transcriber for XLS cells.

Turns a :class:`CellStyle` from the sheet's style table into the values the
PDF renderer understands: optional RGB colors, a scaled font size, font
flags, alignment enums and per-side border flags. Every function here is
pure; the :class:`StyleTranscriber` class only binds a palette and a scale.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..engine.layout_primitives import BorderFlags, CellAppearance, FontDescriptor, FontFlags
from ..engine.scale import ScaleCalculator
from ..models.style import UNDERLINE_SINGLE, CellStyle
from ..utils.enums import (
    CellValueType,
    HorizontalAlignment,
    SourceHorizontal,
    SourceVertical,
    VerticalAlignment,
)
from .color_map import RGB, Palette


HORIZONTAL_MAP = {
    SourceHorizontal.LEFT: HorizontalAlignment.LEFT,
    SourceHorizontal.CENTER: HorizontalAlignment.CENTER,
    SourceHorizontal.RIGHT: HorizontalAlignment.RIGHT,
    SourceHorizontal.FILL: HorizontalAlignment.LEFT,
    SourceHorizontal.JUSTIFY: HorizontalAlignment.JUSTIFY,
    SourceHorizontal.CENTER_ACROSS_SELECTION: HorizontalAlignment.CENTER,
    SourceHorizontal.DISTRIBUTED: HorizontalAlignment.JUSTIFY,
}

VERTICAL_MAP = {
    SourceVertical.TOP: VerticalAlignment.TOP,
    SourceVertical.CENTER: VerticalAlignment.MIDDLE,
    SourceVertical.BOTTOM: VerticalAlignment.BOTTOM,
    SourceVertical.JUSTIFY: VerticalAlignment.MIDDLE,
    SourceVertical.DISTRIBUTED: VerticalAlignment.MIDDLE,
}


def fill_color(style: CellStyle, palette: Palette) -> Optional[RGB]:
    return palette.resolve(style.fill_color_index)


def font_color(style: CellStyle, palette: Palette) -> Optional[RGB]:
    return palette.resolve(style.font.color_index)


def font_weight(style: CellStyle) -> FontFlags:
    """Bold, italic and underline flags; only a single underline is reproduced."""
    font = style.font
    return FontFlags(
        bold=bool(font.bold),
        italic=bool(font.italic),
        underline=font.underline == UNDERLINE_SINGLE,
    )


def font_size(style: CellStyle, scale: ScaleCalculator) -> float:
    return scale.font_size(style.font.height)


def alignment(style: CellStyle, value_type: CellValueType) -> Tuple[HorizontalAlignment, VerticalAlignment]:
    """
    Resolve horizontal and vertical alignment.

    A general (unset) horizontal alignment follows the spreadsheet display
    convention: numbers and dates align right, everything else aligns left.
    """
    if style.horizontal == SourceHorizontal.GENERAL:
        horizontal = HorizontalAlignment.RIGHT if value_type.is_numeric else HorizontalAlignment.LEFT
    else:
        horizontal = HORIZONTAL_MAP.get(style.horizontal, HorizontalAlignment.LEFT)
    vertical = VERTICAL_MAP.get(style.vertical, VerticalAlignment.BOTTOM)
    return horizontal, vertical


def borders(style: CellStyle) -> BorderFlags:
    lines = style.borders
    return BorderFlags(
        top=lines.top > 0,
        bottom=lines.bottom > 0,
        left=lines.left > 0,
        right=lines.right > 0,
    )


def transcribe(
    style: CellStyle,
    palette: Palette,
    scale: ScaleCalculator,
    value_type: CellValueType,
) -> CellAppearance:
    """
    Transcribe a cell style into its rendered appearance.

    Args:
        style: Style table entry of the cell
        palette: Sheet palette used to resolve color indexes
        scale: Scale calculator of the current conversion
        value_type: Type of the cell's value, used for general alignment

    Returns:
        CellAppearance for the layout record

    Raises:
        UnsupportedStyleError: If a color index is not in the palette
    """
    flags = font_weight(style)
    horizontal, vertical = alignment(style, value_type)
    return CellAppearance(
        font=FontDescriptor(
            size=font_size(style, scale),
            bold=flags.bold,
            italic=flags.italic,
            underline=flags.underline,
            color=font_color(style, palette),
        ),
        horizontal=horizontal,
        vertical=vertical,
        background=fill_color(style, palette),
        borders=borders(style),
    )


class StyleTranscriber:
    """Bind a palette and a scale so the layout engine can transcribe cells in one call."""

    def __init__(self, palette: Palette, scale: ScaleCalculator) -> None:
        self.palette = palette
        self.scale = scale

    def transcribe(self, style: CellStyle, value_type: CellValueType) -> CellAppearance:
        return transcribe(style, self.palette, self.scale, value_type)
