"""
Reader for legacy binary spreadsheets.

Builds the in-memory :class:`Sheet` for worksheet 0 from xlrd's workbook
model (cells, XF records, fonts, palette, merged cells, column widths and
row heights) plus the pictures found by :class:`DrawingParser`.
"""

from __future__ import annotations

import logging
from datetime import time
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

import xlrd
from xlrd.biffh import (
    XL_CELL_BLANK,
    XL_CELL_BOOLEAN,
    XL_CELL_DATE,
    XL_CELL_EMPTY,
    XL_CELL_ERROR,
    XL_CELL_NUMBER,
    XL_CELL_TEXT,
    error_text_from_code,
)
from xlrd.compdoc import CompDocError
from xlrd.xldate import XLDateError, xldate_as_datetime

from ..exceptions import DocumentIOError, EmptySheetError, ParsingError, UnsupportedStyleError
from ..models.sheet import DEFAULT_COLUMN_WIDTH, DEFAULT_ROW_HEIGHT, Cell, MergedRegion, Row, Sheet
from ..models.style import AUTOMATIC_COLOR_INDEX, BorderLines, CellStyle, FontSpec
from ..styles.color_map import Palette
from ..utils.enums import CellValueType, SourceHorizontal, SourceVertical
from ..utils.logger import LogWriter
from .drawing_parser import DrawingParser

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, bytearray, BinaryIO]

OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_SIGNATURE = b"PK\x03\x04"

VALUE_TYPES = {
    XL_CELL_TEXT: CellValueType.TEXT,
    XL_CELL_NUMBER: CellValueType.NUMBER,
    XL_CELL_DATE: CellValueType.DATE,
    XL_CELL_BOOLEAN: CellValueType.BOOLEAN,
    XL_CELL_ERROR: CellValueType.ERROR,
    XL_CELL_BLANK: CellValueType.BLANK,
}


def read_source(source: Source) -> bytes:
    """
    Read a whole document into memory.

    Args:
        source: Path, raw bytes or binary stream

    Raises:
        DocumentIOError: If the path or stream cannot be read
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise DocumentIOError("Cannot read input document", path=str(path), details=str(exc)) from exc
    if hasattr(source, "read"):
        try:
            data = source.read()
        except OSError as exc:
            raise DocumentIOError("Cannot read input stream", details=str(exc)) from exc
        if not isinstance(data, (bytes, bytearray)):
            raise DocumentIOError("Input stream must be opened in binary mode")
        return bytes(data)
    raise TypeError(f"Unsupported source type: {type(source).__name__}")


def format_number(value: float) -> str:
    """Render a number the way a general-format cell shows it."""
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return format(value, ".15g")


def format_value(value, ctype: int, datemode: int) -> str:
    """Resolve the display text of a cell from xlrd's value and type."""
    if ctype == XL_CELL_TEXT:
        return str(value)
    if ctype == XL_CELL_NUMBER:
        return format_number(float(value))
    if ctype == XL_CELL_DATE:
        try:
            moment = xldate_as_datetime(value, datemode)
        except (XLDateError, ValueError, OverflowError):
            return format_number(float(value))
        if moment.time() == time(0):
            return moment.date().isoformat()
        if float(value) < 1:
            return moment.time().isoformat()
        return moment.isoformat(sep=" ")
    if ctype == XL_CELL_BOOLEAN:
        return "TRUE" if value else "FALSE"
    if ctype == XL_CELL_ERROR:
        return error_text_from_code.get(value, f"#ERR{value}")
    return ""


class XlsReader:
    """
    Reader for worksheet 0 of an ``.xls`` document.

    Provides functionality for:
    - Opening the workbook with formatting information
    - Building the shared style table from XF and FONT records
    - Mapping cells, row heights, column widths and merged cells
    - Collecting anchored pictures
    """

    def __init__(self, include_pictures: bool = True):
        self.include_pictures = include_pictures

    def read(self, source: Source) -> Sheet:
        """
        Read worksheet 0.

        Args:
            source: Path, raw bytes or binary stream of the document

        Returns:
            Sheet model

        Raises:
            ParsingError: If the document is not a readable legacy workbook
            EmptySheetError: If the workbook has no worksheet
            DocumentIOError: If the source cannot be read
        """
        data = read_source(source)
        self._check_signature(data)
        book = self._open(data)
        try:
            if book.nsheets == 0:
                raise EmptySheetError("Workbook has no worksheet")
            xl_sheet = book.sheet_by_index(0)
            sheet = Sheet(
                rows=self._read_rows(xl_sheet, book.datemode),
                styles=self._read_styles(book),
                merged_regions=[
                    MergedRegion(first_row=rlo, last_row=rhi - 1, first_col=clo, last_col=chi - 1)
                    for rlo, rhi, clo, chi in xl_sheet.merged_cells
                ],
                column_widths=[xl_sheet.computed_column_width(col) for col in range(xl_sheet.ncols)],
                palette=Palette(book.colour_map),
                default_column_width=self._default_column_width(xl_sheet),
                default_row_height=xl_sheet.default_row_height or DEFAULT_ROW_HEIGHT,
                name=xl_sheet.name,
            )
        finally:
            book.release_resources()

        if self.include_pictures:
            sheet.pictures = DrawingParser.from_document(data).pictures(0)

        logger.info(
            f"Read sheet {sheet.name!r}: {sheet.row_count} rows, {sheet.header_column_count} header columns, "
            f"{len(sheet.merged_regions)} merged regions, {len(sheet.pictures)} pictures"
        )
        return sheet

    @staticmethod
    def _check_signature(data: bytes) -> None:
        if data.startswith(ZIP_SIGNATURE):
            raise ParsingError(
                "Only legacy binary .xls workbooks are supported",
                details="input is a zip package (.xlsx)",
            )
        if not data.startswith(OLE2_SIGNATURE):
            raise ParsingError("Input is not an OLE2 compound document", details=f"{len(data)} bytes")

    @staticmethod
    def _open(data: bytes):
        try:
            return xlrd.open_workbook(
                file_contents=data,
                formatting_info=True,
                ragged_rows=True,
                on_demand=False,
                logfile=LogWriter(logger),
            )
        except (xlrd.XLRDError, CompDocError) as exc:
            raise ParsingError("Cannot decode workbook", details=str(exc)) from exc

    @staticmethod
    def _default_column_width(xl_sheet) -> int:
        if xl_sheet.standardwidth is not None:
            return xl_sheet.standardwidth
        if xl_sheet.defcolwidth is not None:
            return xl_sheet.defcolwidth * 256
        return DEFAULT_COLUMN_WIDTH

    def _read_rows(self, xl_sheet, datemode: int) -> List[Optional[Row]]:
        rows: List[Optional[Row]] = []
        for row_index in range(xl_sheet.nrows):
            row_info = xl_sheet.rowinfo_map.get(row_index)
            length = xl_sheet.row_len(row_index)
            if length == 0 and row_info is None:
                rows.append(None)
                continue

            cells: List[Optional[Cell]] = []
            for col_index in range(length):
                ctype = xl_sheet.cell_type(row_index, col_index)
                if ctype == XL_CELL_EMPTY:
                    cells.append(None)
                    continue
                cells.append(
                    Cell(
                        row=row_index,
                        col=col_index,
                        value=format_value(xl_sheet.cell_value(row_index, col_index), ctype, datemode),
                        value_type=VALUE_TYPES[ctype],
                        style_index=xl_sheet.cell_xf_index(row_index, col_index),
                    )
                )
            rows.append(Row(index=row_index, cells=cells, height=row_info.height if row_info else None))
        return rows

    def _read_styles(self, book) -> List[CellStyle]:
        styles: List[CellStyle] = []
        for xf_index, xf in enumerate(book.xf_list):
            if not 0 <= xf.font_index < len(book.font_list):
                raise UnsupportedStyleError(
                    "Style references an unknown font",
                    index=xf.font_index,
                    details=f"XF {xf_index} -> font {xf.font_index}",
                )
            font = book.font_list[xf.font_index]
            background = xf.background
            fill_index = background.pattern_colour_index if background.fill_pattern else AUTOMATIC_COLOR_INDEX
            styles.append(
                CellStyle(
                    fill_color_index=fill_index,
                    font=FontSpec(
                        height=font.height,
                        bold=bool(font.bold),
                        italic=bool(font.italic),
                        underline=font.underline_type,
                        color_index=font.colour_index,
                    ),
                    horizontal=_enum_or(SourceHorizontal, xf.alignment.hor_align, SourceHorizontal.GENERAL),
                    vertical=_enum_or(SourceVertical, xf.alignment.vert_align, SourceVertical.BOTTOM),
                    borders=BorderLines(
                        top=xf.border.top_line_style,
                        bottom=xf.border.bottom_line_style,
                        left=xf.border.left_line_style,
                        right=xf.border.right_line_style,
                    ),
                )
            )
        logger.debug(f"Style table has {len(styles)} entries from {len(book.font_list)} fonts")
        return styles


def _enum_or(enum_type, value, default):
    try:
        return enum_type(value)
    except ValueError:
        logger.debug(f"Unknown {enum_type.__name__} code {value}, using {default.name}")
        return default


def load_sheet(source: Source, include_pictures: bool = True) -> Sheet:
    """Read worksheet 0 of an ``.xls`` document."""
    return XlsReader(include_pictures=include_pictures).read(source)
