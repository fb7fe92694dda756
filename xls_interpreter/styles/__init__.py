"""
Styles module for XLS cell styling.

This module contains the palette lookup and the transcription of cell
styles into rendering attributes.
"""

from .color_map import Palette
from .style_transcriber import StyleTranscriber, transcribe

__all__ = [
    "Palette",
    "StyleTranscriber",
    "transcribe",
]
