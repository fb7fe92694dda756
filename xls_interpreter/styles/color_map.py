"""
Palette for XLS documents.

Maps palette color indexes used by cell styles and fonts to RGB triplets.
Index 64 is the "automatic" color (no explicit fill / renderer default
text color); fonts use 0x7FFF for the same purpose.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple

from xlrd.formatting import excel_default_palette_b8

from ..exceptions import UnsupportedStyleError
from ..models.style import AUTOMATIC_COLOR_INDEX, FONT_AUTOMATIC_INDEX

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

SYSTEM_BACKGROUND_INDEX = 65
TOOLTIP_TEXT_INDEX = 0x51

AUTOMATIC_INDEXES = frozenset({AUTOMATIC_COLOR_INDEX, FONT_AUTOMATIC_INDEX})


class Palette:
    """
    Maps palette indexes to RGB values.

    Entries whose value is ``None`` are system colors without a known RGB
    value; they resolve to "no explicit color" just like the automatic index.
    """

    def __init__(self, colours: Optional[Mapping[int, Optional[RGB]]] = None):
        """
        Initialize palette.

        Args:
            colours: Mapping of palette index to RGB triplet (or None)
        """
        self._colours: Dict[int, Optional[RGB]] = dict(colours or {})
        for index in AUTOMATIC_INDEXES:
            self._colours.setdefault(index, None)

    @classmethod
    def default(cls) -> "Palette":
        """Build the BIFF8 default palette (8 invariant colors, 56 custom slots, system entries)."""
        colours: Dict[int, Optional[RGB]] = {}
        for index, rgb in enumerate(excel_default_palette_b8[:8]):
            colours[index] = tuple(rgb)
        for index, rgb in enumerate(excel_default_palette_b8):
            colours[index + 8] = tuple(rgb)
        colours[SYSTEM_BACKGROUND_INDEX] = None
        colours[TOOLTIP_TEXT_INDEX] = None
        return cls(colours)

    def __contains__(self, index: int) -> bool:
        return index in self._colours

    def __len__(self) -> int:
        return len(self._colours)

    def resolve(self, index: Optional[int]) -> Optional[RGB]:
        """
        Resolve a palette index.

        Args:
            index: Palette index from a style or font record

        Returns:
            RGB triplet, or None when the index means "automatic"

        Raises:
            UnsupportedStyleError: If the index is not part of the palette
        """
        if index is None or index in AUTOMATIC_INDEXES:
            return None
        if index not in self._colours:
            raise UnsupportedStyleError(
                "Color index is not defined in the palette",
                index=index,
                details=f"index={index}",
            )
        rgb = self._colours[index]
        if rgb is None:
            logger.debug(f"Palette index {index} is a system color, using renderer default")
            return None
        return rgb
