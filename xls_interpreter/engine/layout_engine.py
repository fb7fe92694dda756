"""
Layout engine for XLS sheets.

Walks the sheet row-major and produces a :class:`SheetLayout`: one scale
factor for the whole table, scaled column widths and row heights, one
:class:`CellRecord` per emitted cell and the image overlay draws.

Every laid-out row covers exactly the table's column count: merged regions
are emitted once by their anchor (covered coordinates are skipped) and
absent cells become empty filler records.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from ..exceptions import EmptySheetError, UnsupportedStyleError
from ..models.sheet import Sheet
from ..styles.style_transcriber import StyleTranscriber
from .image_overlay import ImageOverlay
from .layout_primitives import CellRecord, ImageDraw, SheetLayout, Span
from .merge_resolver import MergeResolver
from .scale import FONT_SCALE_FACTOR, ROW_HEIGHT_FACTOR, ScaleCalculator

if TYPE_CHECKING:
    from ..config import ConvertOptions

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Build renderer-ready layouts from sheets."""

    def __init__(
        self,
        target_width: float,
        *,
        row_height_factor: float = ROW_HEIGHT_FACTOR,
        font_scale_factor: float = FONT_SCALE_FACTOR,
        include_images: bool = True,
        skip_last_row: bool = False,
    ) -> None:
        """
        Args:
            target_width: Width of the table on the page, in points
            row_height_factor: Multiplier applied to scaled row heights
            font_scale_factor: Multiplier applied to scaled font sizes
            include_images: Place the sheet's pictures
            skip_last_row: Leave the sheet's last row out of the table
        """
        self.target_width = target_width
        self.row_height_factor = row_height_factor
        self.font_scale_factor = font_scale_factor
        self.include_images = include_images
        self.skip_last_row = skip_last_row

    @classmethod
    def from_options(cls, options: "ConvertOptions") -> "LayoutEngine":
        return cls(
            options.frame_width,
            row_height_factor=options.row_height_factor,
            font_scale_factor=options.font_scale_factor,
            include_images=options.include_images,
            skip_last_row=options.skip_last_row,
        )

    def row_limit(self, sheet: Sheet) -> int:
        """Number of rows laid out for ``sheet``."""
        if self.skip_last_row:
            return max(sheet.row_count - 1, 0)
        return sheet.row_count

    def build(self, sheet: Sheet) -> SheetLayout:
        """
        Lay out a sheet.

        Args:
            sheet: Sheet read from the source document

        Returns:
            SheetLayout with records in row-major order

        Raises:
            EmptySheetError: If there is no row or row 0 has no used column
            DegenerateSheetError: If the columns have no width
            InvalidMergeRegionError: If a merged region is invalid
            UnsupportedStyleError: If a cell references a missing style or color
        """
        column_count = sheet.header_column_count
        row_limit = self.row_limit(sheet)
        if sheet.row_count == 0 or column_count == 0 or row_limit == 0:
            raise EmptySheetError(
                "Sheet has nothing to lay out",
                details=f"{sheet.name}: {sheet.row_count} rows, {column_count} columns in row 0",
            )

        # Merged regions are validated before any record is produced
        resolver = MergeResolver(sheet.merged_regions, sheet.row_count, max(sheet.column_count, column_count))

        scale = ScaleCalculator.for_columns(
            sheet.header_column_widths(),
            self.target_width,
            row_height_factor=self.row_height_factor,
            font_scale_factor=self.font_scale_factor,
        )
        column_widths = scale.column_widths(sheet.header_column_widths())
        row_heights = [scale.row_height(sheet.row_height(index)) for index in range(row_limit)]
        transcriber = StyleTranscriber(sheet.palette, scale)

        records: List[CellRecord] = []
        for row in range(row_limit):
            records.extend(
                self._layout_row(sheet, row, column_count, row_limit, row_heights[row], resolver, transcriber)
            )

        images: List[ImageDraw] = []
        if self.include_images and sheet.pictures:
            overlay = ImageOverlay(
                column_widths,
                row_heights,
                default_column_width=scale.column_width(sheet.default_column_width),
                default_row_height=scale.row_height(sheet.default_row_height),
            )
            images = overlay.build(sheet.pictures)

        logger.info(
            f"Laid out {sheet.name!r}: {row_limit} rows x {column_count} columns, "
            f"{len(records)} cells, {len(images)} images (scale {scale.scale:.4f})"
        )
        return SheetLayout(
            scale=scale.scale,
            column_widths=column_widths,
            row_heights=row_heights,
            records=records,
            images=images,
        )

    def _layout_row(
        self,
        sheet: Sheet,
        row: int,
        column_count: int,
        row_limit: int,
        height: float,
        resolver: MergeResolver,
        transcriber: StyleTranscriber,
    ) -> List[CellRecord]:
        records: List[CellRecord] = []
        col = 0
        while col < column_count:
            if resolver.is_suppressed(row, col):
                col += 1
                continue

            region_span = resolver.span_of(row, col)
            span = self._clip_span(region_span or Span(), row, col, column_count, row_limit)
            cell = sheet.cell(row, col)

            if cell is None:
                records.append(
                    CellRecord(
                        row=row,
                        col=col,
                        row_span=span.rows,
                        col_span=span.cols,
                        height=height,
                        is_filler=region_span is None,
                    )
                )
            else:
                try:
                    appearance = transcriber.transcribe(sheet.style_of(cell), cell.value_type)
                except UnsupportedStyleError as exc:
                    if exc.coordinate is not None:
                        raise
                    raise UnsupportedStyleError(
                        exc.message,
                        index=exc.index,
                        coordinate=cell.coordinate,
                        details=f"row {row}, column {col}: {exc.details or exc.index}",
                    ) from exc
                records.append(
                    CellRecord(
                        row=row,
                        col=col,
                        text=cell.value,
                        row_span=span.rows,
                        col_span=span.cols,
                        height=height,
                        appearance=appearance,
                    )
                )
            col += span.cols
        return records

    @staticmethod
    def _clip_span(span: Span, row: int, col: int, column_count: int, row_limit: int) -> Span:
        rows = min(span.rows, row_limit - row)
        cols = min(span.cols, column_count - col)
        if rows != span.rows or cols != span.cols:
            logger.warning(
                f"Merged region at row {row}, column {col} clipped from "
                f"{span.rows}x{span.cols} to {rows}x{cols} to fit the table"
            )
            return Span(rows=rows, cols=cols)
        return span

