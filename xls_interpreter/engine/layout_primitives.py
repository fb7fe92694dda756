"""
Data structures produced by the layout engine.

A :class:`SheetLayout` is everything the renderer needs: scaled column
widths and row heights, one :class:`CellRecord` per emitted table cell (in
row-major order) and the image overlay draws. Renderers never look at the
source sheet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ..utils.enums import HorizontalAlignment, ImageFormat, VerticalAlignment

RGB = Tuple[int, int, int]


###############################################################################
# Cell appearance
###############################################################################


@dataclass(frozen=True, slots=True)
class Span:
    """Row and column extent of an emitted cell."""

    rows: int = 1
    cols: int = 1


@dataclass(frozen=True, slots=True)
class BorderFlags:
    """Which sides of a cell get a drawn border."""

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False

    @property
    def any(self) -> bool:
        return self.top or self.bottom or self.left or self.right


@dataclass(frozen=True, slots=True)
class FontFlags:
    bold: bool = False
    italic: bool = False
    underline: bool = False


@dataclass(frozen=True, slots=True)
class FontDescriptor:
    """Scaled font size, weight flags and optional explicit color."""

    size: float
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: Optional[RGB] = None


@dataclass(frozen=True, slots=True)
class CellAppearance:
    """Transcribed style of one cell."""

    font: FontDescriptor
    horizontal: HorizontalAlignment = HorizontalAlignment.LEFT
    vertical: VerticalAlignment = VerticalAlignment.BOTTOM
    background: Optional[RGB] = None
    borders: BorderFlags = field(default_factory=BorderFlags)


###############################################################################
# Table records
###############################################################################


@dataclass(frozen=True, slots=True)
class CellRecord:
    """
    One emitted table cell.

    Filler records stand in for absent source cells so that every row of the
    table covers the same number of columns; they carry no text and no style.
    """

    row: int
    col: int
    text: str = ""
    row_span: int = 1
    col_span: int = 1
    height: float = 0.0
    appearance: Optional[CellAppearance] = None
    is_filler: bool = False

    @property
    def last_row(self) -> int:
        return self.row + self.row_span - 1

    @property
    def last_col(self) -> int:
        return self.col + self.col_span - 1

    def covers(self) -> Iterator[Tuple[int, int]]:
        for row in range(self.row, self.row + self.row_span):
            for col in range(self.col, self.col + self.col_span):
                yield row, col


###############################################################################
# Overlays
###############################################################################


@dataclass(frozen=True, slots=True)
class ImageDraw:
    """
    Post-layout image draw.

    ``x`` is measured from the table's left edge and ``y`` downwards from
    the table's top edge, both in points.
    """

    row: int
    col: int
    x: float
    y: float
    width: float
    height: float
    data: bytes
    format: ImageFormat
    order: int = 0


@dataclass(slots=True)
class SheetLayout:
    """Complete, renderer-ready layout of a sheet."""

    scale: float
    column_widths: List[float] = field(default_factory=list)
    row_heights: List[float] = field(default_factory=list)
    records: List[CellRecord] = field(default_factory=list)
    images: List[ImageDraw] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.row_heights)

    @property
    def column_count(self) -> int:
        return len(self.column_widths)

    @property
    def width(self) -> float:
        return sum(self.column_widths)

    def records_in_row(self, row: int) -> List[CellRecord]:
        return [record for record in self.records if record.row == row]
