"""Rendering routines for floating images drawn over the sheet table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional, Sequence

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Table

from ..engine.geometry import cumulative
from ..engine.layout_primitives import ImageDraw
from ..exceptions import RenderingError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ImageLayer:
    """Image draws of a whole table plus the top offset of every table row."""

    draws: List[ImageDraw] = field(default_factory=list)
    row_offsets: List[float] = field(default_factory=lambda: [0.0])

    @classmethod
    def for_rows(cls, draws: Sequence[ImageDraw], row_heights: Sequence[float]) -> "ImageLayer":
        return cls(draws=list(draws), row_offsets=cumulative(row_heights))

    def draws_between(self, first_row: int, row_count: int) -> List[ImageDraw]:
        return [draw for draw in self.draws if first_row <= draw.row < first_row + row_count]


class ImageRenderer:
    """Render image draws using ReportLab's drawing primitives."""

    def __init__(self, canvas: Canvas) -> None:
        self.canvas = canvas

    def draw(self, image: ImageDraw, x: float, y: float) -> None:
        """
        Draw ``image`` with its bottom-left corner at (x, y) in canvas coordinates.

        Raises:
            RenderingError: If reportlab cannot read the image data
        """
        try:
            reader = ImageReader(BytesIO(image.data))
        except Exception as exc:
            raise RenderingError(
                "Cannot read picture data",
                details=f"{image.format.value} picture at row {image.row}, column {image.col}: {exc}",
            ) from exc

        self.canvas.drawImage(
            reader,
            x,
            y,
            width=image.width,
            height=image.height,
            preserveAspectRatio=False,
            mask="auto",
        )


class OverlayTable(Table):
    """
    Table that draws its images after the cells.

    Row splitting creates new instances through ``self.__class__``; each
    piece keeps the shared image layer and learns the index of its first
    row so that every image is drawn once, on the piece holding its anchor
    row.
    """

    def __init__(self, *args, overlays: Optional[ImageLayer] = None, first_row: int = 0, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.overlays = overlays if overlays is not None else ImageLayer()
        self.first_row = first_row

    def split(self, availWidth, availHeight):
        pieces = super().split(availWidth, availHeight)
        first_row = self.first_row
        for piece in pieces:
            if piece is self:
                continue
            piece.overlays = self.overlays
            piece.first_row = first_row
            first_row += len(piece._cellvalues)
        return pieces

    def draw(self) -> None:
        super().draw()
        draws = self.overlays.draws_between(self.first_row, len(self._cellvalues))
        if not draws:
            return

        renderer = ImageRenderer(self.canv)
        piece_top = self.overlays.row_offsets[self.first_row]
        for image in draws:
            top = self._height - (image.y - piece_top)
            logger.debug(f"Drawing picture {image.order} at row {image.row}, column {image.col}")
            renderer.draw(image, image.x, top - image.height)
