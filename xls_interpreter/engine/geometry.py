"""Geometry primitives and unit helpers for sheet layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


ANCHOR_DX_UNITS = 1024  # picture x offsets are 1/1024 of the column width
ANCHOR_DY_UNITS = 256  # picture y offsets are 1/256 of the row height


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


def px_to_points(value: float | None, dpi: float = 96.0) -> float:
    if value is None:
        return 0.0
    return float(value) * 72.0 / dpi


def cumulative(values: Sequence[float]) -> List[float]:
    """Return running offsets: ``[0, v0, v0+v1, ...]`` (one longer than ``values``)."""
    offsets = [0.0]
    total = 0.0
    for value in values:
        total += value
        offsets.append(total)
    return offsets
