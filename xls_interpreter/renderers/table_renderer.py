"""Rendering routines for the sheet table."""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.colors import Color
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, TableStyle

from ..engine.layout_primitives import CellAppearance, CellRecord, SheetLayout
from .image_renderer import ImageLayer, OverlayTable
from .render_utils import markup_text, paragraph_alignment, resolve_font_variant, table_valign, to_color

logger = logging.getLogger(__name__)

LEADING_FACTOR = 1.2
MIN_FONT_SIZE = 1.0

CellValue = Union[Paragraph, str]
StyleCommand = Tuple


class TableRenderer:
    """
    Turn a :class:`SheetLayout` into a reportlab table.

    Every record becomes one table cell: merged regions become ``SPAN``
    commands, fills become ``BACKGROUND`` and each drawn border side becomes
    a ``LINE*`` command over the record's range.
    """

    def __init__(
        self,
        font_name: str = "Helvetica",
        border_width: float = 0.5,
        cell_padding: float = 1.0,
        border_color: Color = colors.black,
    ) -> None:
        self.font_name = font_name
        self.border_width = border_width
        self.cell_padding = cell_padding
        self.border_color = border_color
        self._styles: Dict[Tuple, ParagraphStyle] = {}

    def build(self, layout: SheetLayout) -> OverlayTable:
        data, commands = self.table_content(layout)
        table = OverlayTable(
            data,
            colWidths=layout.column_widths,
            rowHeights=layout.row_heights,
            splitByRow=1,
            splitInRow=0,
            hAlign="LEFT",
            overlays=ImageLayer.for_rows(layout.images, layout.row_heights),
        )
        table.setStyle(TableStyle(commands))
        logger.debug(
            f"Table built: {layout.row_count}x{layout.column_count}, {len(commands)} style commands, "
            f"{len(layout.images)} images"
        )
        return table

    def table_content(self, layout: SheetLayout) -> Tuple[List[List[CellValue]], List[StyleCommand]]:
        """Cell values (row-major, covered positions left empty) and table style commands."""
        data: List[List[CellValue]] = [["" for _ in range(layout.column_count)] for _ in range(layout.row_count)]
        commands: List[StyleCommand] = self._base_table_style()
        for record in layout.records:
            data[record.row][record.col] = self.cell_value(record)
            commands.extend(self.cell_commands(record))
        return data, commands

    def cell_value(self, record: CellRecord) -> CellValue:
        if record.appearance is None or not record.text:
            return ""
        style = self.paragraph_style(record.appearance)
        return Paragraph(markup_text(record.text, record.appearance.font.underline), style)

    def paragraph_style(self, appearance: CellAppearance) -> ParagraphStyle:
        font = appearance.font
        key = (font, appearance.horizontal)
        style = self._styles.get(key)
        if style is None:
            size = max(font.size, MIN_FONT_SIZE)
            style = ParagraphStyle(
                name=f"cell-{len(self._styles)}",
                fontName=resolve_font_variant(self.font_name, bold=font.bold, italic=font.italic),
                fontSize=size,
                leading=size * LEADING_FACTOR,
                textColor=to_color(font.color) or colors.black,
                alignment=paragraph_alignment(appearance.horizontal),
                spaceBefore=0,
                spaceAfter=0,
            )
            self._styles[key] = style
        return style

    def cell_commands(self, record: CellRecord) -> List[StyleCommand]:
        start = (record.col, record.row)
        end = (record.last_col, record.last_row)
        commands: List[StyleCommand] = []

        if record.row_span > 1 or record.col_span > 1:
            commands.append(("SPAN", start, end))

        appearance = record.appearance
        if appearance is None:
            return commands

        commands.append(("VALIGN", start, end, table_valign(appearance.vertical)))
        background = to_color(appearance.background)
        if background is not None:
            commands.append(("BACKGROUND", start, end, background))

        borders = appearance.borders
        if borders.top:
            commands.append(("LINEABOVE", start, (record.last_col, record.row), self.border_width, self.border_color))
        if borders.bottom:
            commands.append(("LINEBELOW", (record.col, record.last_row), end, self.border_width, self.border_color))
        if borders.left:
            commands.append(("LINEBEFORE", start, (record.col, record.last_row), self.border_width, self.border_color))
        if borders.right:
            commands.append(("LINEAFTER", (record.last_col, record.row), end, self.border_width, self.border_color))
        return commands

    def _base_table_style(self) -> List[StyleCommand]:
        padding = self.cell_padding
        return [
            ("LEFTPADDING", (0, 0), (-1, -1), padding),
            ("RIGHTPADDING", (0, 0), (-1, -1), padding),
            ("TOPPADDING", (0, 0), (-1, -1), padding),
            ("BOTTOMPADDING", (0, 0), (-1, -1), padding),
            ("VALIGN", (0, 0), (-1, -1), "BOTTOM"),
        ]
