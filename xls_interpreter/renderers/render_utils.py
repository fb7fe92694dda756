"""Utility helpers shared across renderer components."""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import Dict, Optional, Union

from reportlab.lib.colors import Color
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.fonts import addMapping, tt2ps
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from ..engine.layout_primitives import RGB
from ..exceptions import RenderingError
from ..utils.enums import HorizontalAlignment, VerticalAlignment

logger = logging.getLogger(__name__)

PARAGRAPH_ALIGNMENT = {
    HorizontalAlignment.LEFT: TA_LEFT,
    HorizontalAlignment.CENTER: TA_CENTER,
    HorizontalAlignment.RIGHT: TA_RIGHT,
    HorizontalAlignment.JUSTIFY: TA_JUSTIFY,
}

TABLE_VALIGN = {
    VerticalAlignment.TOP: "TOP",
    VerticalAlignment.MIDDLE: "MIDDLE",
    VerticalAlignment.BOTTOM: "BOTTOM",
}

_PDF_FONTS_REGISTERED: Dict[str, str] = {}


def to_color(value: Optional[RGB]) -> Optional[Color]:
    """Convert an 8-bit RGB triplet to a reportlab color; None stays None."""
    if value is None:
        return None
    red, green, blue = value
    return Color(red / 255.0, green / 255.0, blue / 255.0)


def paragraph_alignment(value: HorizontalAlignment) -> int:
    return PARAGRAPH_ALIGNMENT.get(value, TA_LEFT)


def table_valign(value: VerticalAlignment) -> str:
    return TABLE_VALIGN.get(value, "BOTTOM")


def markup_text(text: str, underline: bool = False) -> str:
    """Escape cell text for Paragraph markup, keeping line breaks."""
    escaped = escape(text, quote=False).replace("\r\n", "\n").replace("\n", "<br/>")
    if underline and escaped:
        return f"<u>{escaped}</u>"
    return escaped


def _register_family(font_name: str) -> None:
    for bold in (0, 1):
        for italic in (0, 1):
            addMapping(font_name, bold, italic, font_name)


def ensure_pdf_font(font_name: str, font_path: Optional[Union[str, Path]] = None) -> str:
    """
    Make ``font_name`` usable by reportlab.

    Standard PDF fonts need no registration. A TrueType file is registered
    under ``font_name`` when ``font_path`` is given; otherwise the name is
    tried as a CID font such as ``STSong-Light``.

    Returns:
        The registered font name

    Raises:
        RenderingError: If the font cannot be registered
    """
    if not font_name:
        raise RenderingError("Font name must be a non-empty string")
    if font_name in _PDF_FONTS_REGISTERED or font_name in pdfmetrics.getRegisteredFontNames():
        return font_name
    if font_name in pdfmetrics.standardFonts:
        return font_name

    if font_path:
        try:
            pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        except (TTFError, OSError) as exc:
            raise RenderingError(f"Cannot register font {font_name!r}", details=f"{font_path}: {exc}") from exc
        source = str(font_path)
    else:
        try:
            pdfmetrics.registerFont(UnicodeCIDFont(font_name))
        except (KeyError, ValueError) as exc:
            raise RenderingError(
                f"Unknown font {font_name!r}",
                details="not a standard or CID font and no TrueType file was given",
            ) from exc
        source = "cid"

    # Registered fonts have no separate bold or italic faces
    _register_family(font_name)
    _PDF_FONTS_REGISTERED[font_name] = source
    logger.debug(f"Registered font {font_name} ({source})")
    return font_name


def resolve_font_variant(base_name: str, *, bold: bool = False, italic: bool = False) -> str:
    """Return the face of ``base_name`` for the requested weight and slant."""
    if not bold and not italic:
        return base_name
    try:
        return tt2ps(base_name, int(bold), int(italic))
    except ValueError:
        return base_name
