"""
Sheet model for XLS documents.

A :class:`Sheet` is the read-only, in-memory picture of worksheet 0: rows of
optional cells, the shared style table, merged regions, palette and
floating pictures. It is built once by the reader and never mutated during
a conversion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..exceptions import UnsupportedStyleError
from ..utils.enums import CellValueType
from .image import Picture
from .style import CellStyle

if TYPE_CHECKING:
    from ..styles.color_map import Palette

DEFAULT_COLUMN_WIDTH = 8 * 256  # eight characters, in 1/256 character units
DEFAULT_ROW_HEIGHT = 255  # 12.75pt in twips


def _default_palette() -> "Palette":
    from ..styles.color_map import Palette

    return Palette.default()


@dataclass(frozen=True, slots=True)
class Cell:
    """A cell with its resolved display value and a reference into the style table."""

    row: int
    col: int
    value: str = ""
    value_type: CellValueType = CellValueType.TEXT
    style_index: int = 0

    @property
    def coordinate(self) -> Tuple[int, int]:
        return self.row, self.col


@dataclass(slots=True)
class Row:
    """Ordered cells of one sheet row; ``None`` marks an absent cell."""

    index: int
    cells: List[Optional[Cell]] = field(default_factory=list)
    height: Optional[int] = None

    def cell(self, col: int) -> Optional[Cell]:
        if 0 <= col < len(self.cells):
            return self.cells[col]
        return None

    @property
    def used_column_count(self) -> int:
        return len(self.cells)


@dataclass(frozen=True, slots=True)
class MergedRegion:
    """Inclusive rectangle of merged cells; the top-left cell is the anchor."""

    first_row: int
    last_row: int
    first_col: int
    last_col: int

    @property
    def anchor(self) -> Tuple[int, int]:
        return self.first_row, self.first_col

    @property
    def row_span(self) -> int:
        return self.last_row - self.first_row + 1

    @property
    def col_span(self) -> int:
        return self.last_col - self.first_col + 1

    def contains(self, row: int, col: int) -> bool:
        return self.first_row <= row <= self.last_row and self.first_col <= col <= self.last_col

    def overlaps(self, other: "MergedRegion") -> bool:
        return not (
            self.last_row < other.first_row
            or other.last_row < self.first_row
            or self.last_col < other.first_col
            or other.last_col < self.first_col
        )

    def __str__(self) -> str:
        return f"R{self.first_row}C{self.first_col}:R{self.last_row}C{self.last_col}"


@dataclass(slots=True)
class Sheet:
    """Worksheet 0 of a document, as read from the source file."""

    rows: List[Optional[Row]] = field(default_factory=list)
    styles: List[CellStyle] = field(default_factory=lambda: [CellStyle()])
    merged_regions: List[MergedRegion] = field(default_factory=list)
    pictures: List[Picture] = field(default_factory=list)
    column_widths: List[int] = field(default_factory=list)
    palette: "Palette" = field(default_factory=_default_palette)
    default_column_width: int = DEFAULT_COLUMN_WIDTH
    default_row_height: int = DEFAULT_ROW_HEIGHT
    name: str = "Sheet1"

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return max((row.used_column_count for row in self.rows if row is not None), default=0)

    @property
    def header_column_count(self) -> int:
        """Used-column count of row 0; this fixes the width of the rendered table."""
        header = self.rows[0] if self.rows else None
        return header.used_column_count if header is not None else 0

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def cell(self, row: int, col: int) -> Optional[Cell]:
        source_row = self.row(row)
        if source_row is None:
            return None
        return source_row.cell(col)

    def row_height(self, index: int) -> int:
        source_row = self.row(index)
        if source_row is None or source_row.height is None:
            return self.default_row_height
        return source_row.height

    def column_width(self, col: int) -> int:
        if 0 <= col < len(self.column_widths) and self.column_widths[col] is not None:
            return self.column_widths[col]
        return self.default_column_width

    def header_column_widths(self) -> List[int]:
        return [self.column_width(col) for col in range(self.header_column_count)]

    def style_of(self, cell: Cell) -> CellStyle:
        if not 0 <= cell.style_index < len(self.styles):
            raise UnsupportedStyleError(
                "Cell references an unknown style",
                index=cell.style_index,
                coordinate=cell.coordinate,
                details=f"style {cell.style_index} at row {cell.row}, column {cell.col}",
            )
        return self.styles[cell.style_index]


def build_rows(values: Sequence[Sequence[Optional[str]]], style_index: int = 0) -> List[Optional[Row]]:
    """
    Build rows of text cells from plain values; ``None`` entries become absent cells.

    Args:
        values: Row-major cell values
        style_index: Style table index given to every cell

    Returns:
        List of rows
    """
    rows: List[Optional[Row]] = []
    for row_index, row_values in enumerate(values):
        cells: List[Optional[Cell]] = []
        for col_index, value in enumerate(row_values):
            if value is None:
                cells.append(None)
            else:
                cells.append(Cell(row=row_index, col=col_index, value=value, style_index=style_index))
        rows.append(Row(index=row_index, cells=cells))
    return rows
