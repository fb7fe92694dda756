"""
Tests for turning cell styles into rendered appearances.
"""

import pytest

from xls_interpreter.engine.layout_primitives import BorderFlags, FontFlags
from xls_interpreter.engine.scale import ScaleCalculator
from xls_interpreter.exceptions import UnsupportedStyleError
from xls_interpreter.models import BorderLines, CellStyle, FontSpec
from xls_interpreter.styles.color_map import Palette
from xls_interpreter.styles.style_transcriber import (
    StyleTranscriber,
    alignment,
    borders,
    fill_color,
    font_color,
    font_size,
    font_weight,
    transcribe,
)
from xls_interpreter.utils.enums import (
    CellValueType,
    HorizontalAlignment,
    SourceHorizontal,
    SourceVertical,
    VerticalAlignment,
)


@pytest.fixture
def palette():
    return Palette({10: (255, 0, 0), 12: (0, 0, 255), 65: None})


@pytest.fixture
def scale():
    return ScaleCalculator(0.5)


class TestColors:
    """Test cases for fill and font colors."""

    def test_explicit_fill(self, palette):
        assert fill_color(CellStyle(fill_color_index=10), palette) == (255, 0, 0)

    def test_automatic_fill(self, palette):
        assert fill_color(CellStyle(), palette) is None

    def test_system_fill(self, palette):
        assert fill_color(CellStyle(fill_color_index=65), palette) is None

    def test_font_color(self, palette):
        style = CellStyle(font=FontSpec(color_index=12))
        assert font_color(style, palette) == (0, 0, 255)
        assert font_color(CellStyle(), palette) is None

    def test_unknown_color_raises(self, palette):
        with pytest.raises(UnsupportedStyleError):
            fill_color(CellStyle(fill_color_index=40), palette)


class TestFont:
    """Test cases for font flags and size."""

    def test_flags(self):
        style = CellStyle(font=FontSpec(bold=True, italic=True, underline=1))
        assert font_weight(style) == FontFlags(bold=True, italic=True, underline=True)

    def test_only_single_underline_is_kept(self):
        assert font_weight(CellStyle(font=FontSpec(underline=2))).underline is False

    def test_size_is_scaled(self, scale):
        style = CellStyle(font=FontSpec(height=240))
        assert font_size(style, scale) == pytest.approx(240 * 0.5 * 1.05)


class TestAlignment:
    """Test cases for alignment resolution."""

    @pytest.mark.parametrize(
        "value_type, expected",
        [
            (CellValueType.TEXT, HorizontalAlignment.LEFT),
            (CellValueType.NUMBER, HorizontalAlignment.RIGHT),
            (CellValueType.DATE, HorizontalAlignment.RIGHT),
            (CellValueType.BOOLEAN, HorizontalAlignment.LEFT),
        ],
    )
    def test_general_alignment(self, value_type, expected):
        horizontal, _ = alignment(CellStyle(), value_type)
        assert horizontal == expected

    def test_explicit_alignment_wins(self):
        style = CellStyle(horizontal=SourceHorizontal.CENTER, vertical=SourceVertical.TOP)
        assert alignment(style, CellValueType.NUMBER) == (HorizontalAlignment.CENTER, VerticalAlignment.TOP)

    def test_vertical_center(self):
        style = CellStyle(vertical=SourceVertical.CENTER)
        assert alignment(style, CellValueType.TEXT)[1] == VerticalAlignment.MIDDLE


class TestBorders:
    """Test cases for border flags."""

    def test_no_borders(self):
        assert borders(CellStyle()) == BorderFlags()
        assert not borders(CellStyle()).any

    def test_any_line_style_draws(self):
        style = CellStyle(borders=BorderLines(top=1, bottom=0, left=5, right=0))
        assert borders(style) == BorderFlags(top=True, bottom=False, left=True, right=False)


class TestTranscribe:
    """Test cases for the combined transcription."""

    def test_full_appearance(self, palette, scale):
        style = CellStyle(
            fill_color_index=10,
            font=FontSpec(height=200, bold=True, color_index=12),
            horizontal=SourceHorizontal.RIGHT,
            vertical=SourceVertical.CENTER,
            borders=BorderLines(top=1, bottom=1, left=1, right=1),
        )
        appearance = transcribe(style, palette, scale, CellValueType.TEXT)

        assert appearance.background == (255, 0, 0)
        assert appearance.font.color == (0, 0, 255)
        assert appearance.font.bold is True
        assert appearance.font.size == pytest.approx(105.0)
        assert appearance.horizontal == HorizontalAlignment.RIGHT
        assert appearance.vertical == VerticalAlignment.MIDDLE
        assert appearance.borders == BorderFlags(top=True, bottom=True, left=True, right=True)

    def test_bound_transcriber(self, palette, scale):
        transcriber = StyleTranscriber(palette, scale)
        assert transcriber.transcribe(CellStyle(), CellValueType.TEXT) == transcribe(
            CellStyle(), palette, scale, CellValueType.TEXT
        )
