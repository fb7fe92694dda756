"""
Image overlay placement.

Pictures float above the grid: they are positioned after the table has been
laid out, from the scaled column widths and row heights of the layout.
Offsets are measured from the table's top-left corner, ``y`` growing down.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from ..exceptions import ParsingError
from ..models.image import AnchorPoint, Picture
from .geometry import ANCHOR_DX_UNITS, ANCHOR_DY_UNITS, cumulative, px_to_points
from .layout_primitives import ImageDraw

logger = logging.getLogger(__name__)

IMAGE_DPI = 96.0


class ImageOverlay:
    """
    Turn anchored pictures into positioned draw instructions.

    Columns and rows past the end of the table (a picture may stretch
    beyond the used range) take the sheet's default size, already scaled.
    """

    def __init__(
        self,
        column_widths: Sequence[float],
        row_heights: Sequence[float],
        default_column_width: float,
        default_row_height: float,
        dpi: float = IMAGE_DPI,
    ) -> None:
        self.column_widths = list(column_widths)
        self.row_heights = list(row_heights)
        self.default_column_width = default_column_width
        self.default_row_height = default_row_height
        self.dpi = dpi
        self._column_offsets = cumulative(self.column_widths)
        self._row_offsets = cumulative(self.row_heights)

    def column_width(self, col: int) -> float:
        if col < len(self.column_widths):
            return self.column_widths[col]
        return self.default_column_width

    def row_height(self, row: int) -> float:
        if row < len(self.row_heights):
            return self.row_heights[row]
        return self.default_row_height

    def column_offset(self, col: int) -> float:
        if col < len(self._column_offsets):
            return self._column_offsets[col]
        extra = col - len(self.column_widths)
        return self._column_offsets[-1] + extra * self.default_column_width

    def row_offset(self, row: int) -> float:
        if row < len(self._row_offsets):
            return self._row_offsets[row]
        extra = row - len(self.row_heights)
        return self._row_offsets[-1] + extra * self.default_row_height

    def locate(self, point: AnchorPoint) -> Tuple[float, float]:
        """Return the (x, y) offset of an anchor point from the table's top-left corner."""
        dx = min(max(point.dx, 0), ANCHOR_DX_UNITS)
        dy = min(max(point.dy, 0), ANCHOR_DY_UNITS)
        x = self.column_offset(point.col) + dx / ANCHOR_DX_UNITS * self.column_width(point.col)
        y = self.row_offset(point.row) + dy / ANCHOR_DY_UNITS * self.row_height(point.row)
        return x, y

    def intrinsic_size(self, picture: Picture) -> Tuple[float, float]:
        """
        Natural size of a picture in points.

        Raises:
            ParsingError: If the image data cannot be decoded
        """
        try:
            with Image.open(BytesIO(picture.data)) as image:
                width_px, height_px = image.size
        except (UnidentifiedImageError, OSError) as exc:
            raise ParsingError(
                "Picture data cannot be decoded",
                details=f"{picture.format.value} picture at row {picture.row}, column {picture.col}: {exc}",
            ) from exc
        return px_to_points(width_px, self.dpi), px_to_points(height_px, self.dpi)

    def place(self, picture: Picture) -> Optional[ImageDraw]:
        """
        Position one picture.

        Returns:
            ImageDraw, or None when the picture cannot be drawn
        """
        if not picture.format.is_raster:
            logger.warning(
                f"Skipping {picture.format.value} picture at row {picture.row}, column {picture.col}: "
                "vector pictures are not supported"
            )
            return None
        if picture.row >= len(self.row_heights) or picture.row < 0 or picture.col < 0:
            logger.warning(
                f"Skipping picture anchored at row {picture.row}, column {picture.col}: "
                f"outside the {len(self.row_heights)} laid-out rows"
            )
            return None

        x, y = self.locate(picture.anchor)
        width = height = 0.0
        if picture.end is not None:
            end_x, end_y = self.locate(picture.end)
            width, height = end_x - x, end_y - y
        if width <= 0 or height <= 0:
            width, height = self.intrinsic_size(picture)

        return ImageDraw(
            row=picture.row,
            col=picture.col,
            x=x,
            y=y,
            width=width,
            height=height,
            data=picture.data,
            format=picture.format,
            order=picture.order,
        )

    def build(self, pictures: Sequence[Picture]) -> List[ImageDraw]:
        """Place every picture in document order."""
        draws: List[ImageDraw] = []
        for picture in sorted(pictures, key=lambda item: item.order):
            draw = self.place(picture)
            if draw is not None:
                draws.append(draw)
        logger.debug(f"Placed {len(draws)} of {len(pictures)} pictures")
        return draws
