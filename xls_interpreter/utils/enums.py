"""Common enumerations used across the XLS interpreter models."""

from __future__ import annotations

from enum import Enum, IntEnum


class CellValueType(str, Enum):
    """Kinds of resolved cell values."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    ERROR = "error"
    BLANK = "blank"

    @property
    def is_numeric(self) -> bool:
        return self in (CellValueType.NUMBER, CellValueType.DATE)


class SourceHorizontal(IntEnum):
    """Horizontal alignment codes stored in an XF record."""

    GENERAL = 0
    LEFT = 1
    CENTER = 2
    RIGHT = 3
    FILL = 4
    JUSTIFY = 5
    CENTER_ACROSS_SELECTION = 6
    DISTRIBUTED = 7


class SourceVertical(IntEnum):
    """Vertical alignment codes stored in an XF record."""

    TOP = 0
    CENTER = 1
    BOTTOM = 2
    JUSTIFY = 3
    DISTRIBUTED = 4


class HorizontalAlignment(str, Enum):
    """Horizontal text placement inside a rendered cell."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VerticalAlignment(str, Enum):
    """Vertical text placement inside a rendered cell."""

    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class ImageFormat(str, Enum):
    """Picture payload formats found in a drawing group."""

    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    TIFF = "tiff"
    EMF = "emf"
    WMF = "wmf"
    PICT = "pict"

    @property
    def is_raster(self) -> bool:
        return self in (ImageFormat.PNG, ImageFormat.JPEG, ImageFormat.BMP, ImageFormat.TIFF)
