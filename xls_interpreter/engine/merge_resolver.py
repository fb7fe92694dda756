"""Merged-region lookups for the layout walk."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..exceptions import InvalidMergeRegionError
from ..models.sheet import MergedRegion
from .layout_primitives import Span

logger = logging.getLogger(__name__)


class MergeResolver:
    """
    Answer "skip or span" for every coordinate of a sheet.

    Regions are validated once: each must be well formed, have its anchor
    inside the sheet and not overlap any other region. Anchors are indexed
    by coordinate; suppression is a scan over region bounds.
    """

    def __init__(self, regions: Iterable[MergedRegion], row_count: int, column_count: int) -> None:
        """
        Build the resolver.

        Args:
            regions: Merged regions of the sheet
            row_count: Number of rows in the sheet
            column_count: Number of columns in the widest row

        Raises:
            InvalidMergeRegionError: If a region is inverted, outside the sheet or overlapping
        """
        self.row_count = row_count
        self.column_count = column_count
        self.regions: List[MergedRegion] = []
        self._anchors: Dict[Tuple[int, int], MergedRegion] = {}

        for region in regions:
            self._validate(region)
            self.regions.append(region)
            self._anchors[region.anchor] = region

        logger.debug(f"MergeResolver built with {len(self.regions)} regions")

    def _validate(self, region: MergedRegion) -> None:
        if region.first_row < 0 or region.first_col < 0:
            raise InvalidMergeRegionError(
                "Merged region has a negative coordinate", region=region, details=str(region)
            )
        if region.last_row < region.first_row or region.last_col < region.first_col:
            raise InvalidMergeRegionError("Merged region is inverted", region=region, details=str(region))
        if region.first_row >= self.row_count or region.first_col >= self.column_count:
            raise InvalidMergeRegionError(
                "Merged region anchor lies outside the sheet",
                region=region,
                details=f"{region} in a {self.row_count}x{self.column_count} sheet",
            )
        for other in self.regions:
            if region.overlaps(other):
                raise InvalidMergeRegionError(
                    "Merged regions overlap", region=region, details=f"{region} overlaps {other}"
                )

    def region_at(self, row: int, col: int) -> Optional[MergedRegion]:
        for region in self.regions:
            if region.contains(row, col):
                return region
        return None

    def is_anchor(self, row: int, col: int) -> bool:
        return (row, col) in self._anchors

    def is_suppressed(self, row: int, col: int) -> bool:
        """True iff the coordinate is covered by a region but is not its anchor."""
        if (row, col) in self._anchors:
            return False
        return self.region_at(row, col) is not None

    def span_of(self, row: int, col: int) -> Optional[Span]:
        """Span of the region anchored here, or None for a plain 1x1 cell."""
        region = self._anchors.get((row, col))
        if region is None:
            return None
        return Span(rows=region.row_span, cols=region.col_span)
