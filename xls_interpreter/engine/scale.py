"""Single scale factor mapping sheet units onto page points."""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..exceptions import DegenerateSheetError

logger = logging.getLogger(__name__)

ROW_HEIGHT_FACTOR = 1.2
FONT_SCALE_FACTOR = 1.05


def compute_scale(column_widths: Sequence[float], target_width: float) -> float:
    """
    Compute the ratio between the target page width and the sheet width.

    Args:
        column_widths: Width of every table column in 1/256 character units
        target_width: Width available on the page in points

    Returns:
        Scale factor applied to widths, heights and font sizes

    Raises:
        DegenerateSheetError: If there are no columns or they have no width
    """
    if not column_widths:
        raise DegenerateSheetError("Sheet has no columns to scale", details="column count is 0")
    total = float(sum(column_widths))
    if total <= 0:
        raise DegenerateSheetError(
            "Sheet columns have no width",
            details=f"{len(column_widths)} columns, total width {total}",
        )
    scale = target_width / total
    logger.debug(f"Scale factor {scale:.6f} ({target_width}pt / {total} units)")
    return scale


class ScaleCalculator:
    """
    Apply one scale factor uniformly.

    Row heights and font sizes use the same factor as column widths, each
    multiplied by an empirical constant because the sheet stores them in
    twips rather than character units.
    """

    def __init__(
        self,
        scale: float,
        row_height_factor: float = ROW_HEIGHT_FACTOR,
        font_scale_factor: float = FONT_SCALE_FACTOR,
    ) -> None:
        self.scale = scale
        self.row_height_factor = row_height_factor
        self.font_scale_factor = font_scale_factor

    @classmethod
    def for_columns(
        cls,
        column_widths: Sequence[float],
        target_width: float,
        row_height_factor: float = ROW_HEIGHT_FACTOR,
        font_scale_factor: float = FONT_SCALE_FACTOR,
    ) -> "ScaleCalculator":
        return cls(compute_scale(column_widths, target_width), row_height_factor, font_scale_factor)

    def column_width(self, units: float) -> float:
        return units * self.scale

    def column_widths(self, units: Sequence[float]) -> List[float]:
        return [self.column_width(value) for value in units]

    def row_height(self, twips: float) -> float:
        return twips * self.scale * self.row_height_factor

    def font_size(self, twips: float) -> float:
        return twips * self.scale * self.font_scale_factor
