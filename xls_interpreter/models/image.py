"""Floating picture model for XLS sheets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..utils.enums import ImageFormat


@dataclass(frozen=True, slots=True)
class AnchorPoint:
    """
    Cell-relative position of a picture corner.

    ``dx`` is measured in 1/1024 of the column width and ``dy`` in 1/256 of
    the row height, as stored in a sheet client anchor.
    """

    row: int
    col: int
    dx: int = 0
    dy: int = 0


@dataclass(frozen=True, slots=True)
class Picture:
    """Picture anchored to a cell, drawn over the table after layout."""

    anchor: AnchorPoint
    data: bytes
    format: ImageFormat
    end: Optional[AnchorPoint] = None
    order: int = 0

    @property
    def row(self) -> int:
        return self.anchor.row

    @property
    def col(self) -> int:
        return self.anchor.col
