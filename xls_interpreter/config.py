"""Conversion options for the XLS to PDF pipeline."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from reportlab.lib.pagesizes import A3, A4, LEGAL, LETTER, landscape, portrait

from .engine.geometry import Margins
from .engine.scale import FONT_SCALE_FACTOR, ROW_HEIGHT_FACTOR

PAGE_SIZES: Dict[str, Tuple[float, float]] = {
    "A4": A4,
    "A3": A3,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
}

DEFAULT_MARGIN = 36.0
DEFAULT_FONT = "Helvetica"


@dataclass(frozen=True)
class ConvertOptions:
    """
    Options of a single conversion.

    Attributes:
        page_size: Name of a page preset (``A4``, ``A3``, ``LETTER``, ``LEGAL``).
        landscape: Lay the page out in landscape orientation.
        margin: Page margin on every side, in points.
        font_name: Base font; a registered CID font name (``STSong-Light``) works too.
        font_path: Optional TrueType file registered under ``font_name``.
        row_height_factor: Multiplier applied to scaled row heights.
        font_scale_factor: Multiplier applied to scaled font sizes.
        border_width: Stroke width of cell borders, in points.
        cell_padding: Inner padding of every cell, in points.
        include_images: Overlay the sheet's pictures.
        skip_last_row: Leave the sheet's last row out of the table.
    """

    page_size: str = "A4"
    landscape: bool = True
    margin: float = DEFAULT_MARGIN
    font_name: str = DEFAULT_FONT
    font_path: Optional[Path] = None
    row_height_factor: float = ROW_HEIGHT_FACTOR
    font_scale_factor: float = FONT_SCALE_FACTOR
    border_width: float = 0.5
    cell_padding: float = 1.0
    include_images: bool = True
    skip_last_row: bool = False

    def __post_init__(self) -> None:
        if self.page_size.upper() not in PAGE_SIZES:
            raise ValueError(
                f"Unknown page size {self.page_size!r}; expected one of {', '.join(PAGE_SIZES)}"
            )
        object.__setattr__(self, "page_size", self.page_size.upper())
        if self.font_path is not None and not isinstance(self.font_path, Path):
            object.__setattr__(self, "font_path", Path(self.font_path))
        for name in ("margin", "border_width", "cell_padding"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        for name in ("row_height_factor", "font_scale_factor"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if not self.font_name:
            raise ValueError("font_name must be a non-empty string")
        width, height = self.pagesize
        if 2 * self.margin >= min(width, height):
            raise ValueError(f"margin {self.margin} leaves no room on a {self.page_size} page")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConvertOptions":
        """Build options from a mapping, ignoring ``None`` values and rejecting unknown keys."""
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown option(s): {', '.join(unknown)}")
        return cls(**{key: value for key, value in data.items() if value is not None})

    def to_dict(self) -> Dict[str, Any]:
        result = {item.name: getattr(self, item.name) for item in fields(self)}
        if self.font_path is not None:
            result["font_path"] = str(self.font_path)
        return result

    @property
    def pagesize(self) -> Tuple[float, float]:
        size = PAGE_SIZES[self.page_size.upper()]
        return landscape(size) if self.landscape else portrait(size)

    @property
    def margins(self) -> Margins:
        return Margins.uniform(self.margin)

    @property
    def frame_width(self) -> float:
        """Width available to the table, in points."""
        return self.pagesize[0] - self.margins.horizontal
