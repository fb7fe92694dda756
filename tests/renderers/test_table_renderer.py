"""
Tests for turning sheet layouts into reportlab tables.
"""

from unittest.mock import Mock

import pytest
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.platypus import Paragraph

from xls_interpreter.engine.layout_engine import LayoutEngine
from xls_interpreter.engine.layout_primitives import (
    BorderFlags,
    CellAppearance,
    CellRecord,
    FontDescriptor,
    ImageDraw,
)
from xls_interpreter.exceptions import RenderingError
from xls_interpreter.renderers.image_renderer import ImageLayer, ImageRenderer, OverlayTable
from xls_interpreter.renderers.render_utils import (
    ensure_pdf_font,
    markup_text,
    resolve_font_variant,
    to_color,
)
from xls_interpreter.renderers.table_renderer import TableRenderer
from xls_interpreter.utils.enums import HorizontalAlignment, ImageFormat, VerticalAlignment


def appearance(**overrides):
    values = dict(font=FontDescriptor(size=10.0))
    values.update(overrides)
    return CellAppearance(**values)


def image_draw(row, png, x=0.0, y=0.0, width=20.0, height=10.0):
    return ImageDraw(row=row, col=0, x=x, y=y, width=width, height=height, data=png, format=ImageFormat.PNG)


class TestRenderUtils:
    """Test cases for renderer helpers."""

    def test_to_color(self):
        color = to_color((255, 0, 0))
        assert (color.red, color.green, color.blue) == (1.0, 0.0, 0.0)
        assert to_color(None) is None

    def test_markup_escapes_and_breaks_lines(self):
        assert markup_text("a < b & c\nnext") == "a &lt; b &amp; c<br/>next"

    def test_markup_underline(self):
        assert markup_text("x", underline=True) == "<u>x</u>"
        assert markup_text("", underline=True) == ""

    def test_font_variants(self):
        assert resolve_font_variant("Helvetica") == "Helvetica"
        assert resolve_font_variant("Helvetica", bold=True) == "Helvetica-Bold"
        assert resolve_font_variant("Times-Roman", bold=True, italic=True) == "Times-BoldItalic"

    def test_unknown_family_keeps_base(self):
        assert resolve_font_variant("NoSuchFace", bold=True) == "NoSuchFace"

    def test_standard_font_needs_no_registration(self):
        assert ensure_pdf_font("Helvetica") == "Helvetica"

    def test_unknown_font_raises(self):
        with pytest.raises(RenderingError):
            ensure_pdf_font("NoSuchFace-Regular")

    def test_missing_truetype_file_raises(self, temp_dir):
        with pytest.raises(RenderingError):
            ensure_pdf_font("MissingTTF", temp_dir / "missing.ttf")


class TestTableRenderer:
    """Test cases for TableRenderer."""

    def test_build_returns_overlay_table(self, minimal_sheet):
        layout = LayoutEngine(500).build(minimal_sheet)
        table = TableRenderer().build(layout)

        assert isinstance(table, OverlayTable)
        assert len(table._cellvalues) == 2
        assert table.overlays.row_offsets == pytest.approx([0.0, layout.row_heights[0], sum(layout.row_heights)])

    def test_merged_header_span(self, merged_header_sheet):
        layout = LayoutEngine(500).build(merged_header_sheet)
        data, commands = TableRenderer().table_content(layout)

        assert ("SPAN", (0, 0), (2, 0)) in commands
        assert isinstance(data[0][0], Paragraph)
        assert data[0][1] == "" and data[0][2] == ""

    def test_filler_has_no_commands(self):
        record = CellRecord(row=1, col=2, is_filler=True)
        renderer = TableRenderer()
        assert renderer.cell_value(record) == ""
        assert renderer.cell_commands(record) == []

    def test_background_and_valign(self):
        record = CellRecord(
            row=0,
            col=0,
            text="x",
            appearance=appearance(background=(0, 0, 255), vertical=VerticalAlignment.TOP),
        )
        commands = TableRenderer().cell_commands(record)

        assert ("VALIGN", (0, 0), (0, 0), "TOP") in commands
        backgrounds = [command for command in commands if command[0] == "BACKGROUND"]
        assert len(backgrounds) == 1
        assert backgrounds[0][3] == colors.Color(0, 0, 1)

    def test_borders_cover_the_span(self):
        record = CellRecord(
            row=1,
            col=1,
            text="x",
            row_span=2,
            col_span=3,
            appearance=appearance(borders=BorderFlags(top=True, bottom=True, left=True, right=True)),
        )
        commands = {command[0]: command for command in TableRenderer(border_width=0.75).cell_commands(record)}

        assert commands["SPAN"] == ("SPAN", (1, 1), (3, 2))
        assert commands["LINEABOVE"][1:3] == ((1, 1), (3, 1))
        assert commands["LINEBELOW"][1:3] == ((1, 2), (3, 2))
        assert commands["LINEBEFORE"][1:3] == ((1, 1), (1, 2))
        assert commands["LINEAFTER"][1:3] == ((3, 1), (3, 2))
        assert commands["LINEABOVE"][3] == 0.75

    def test_no_border_commands_without_borders(self):
        record = CellRecord(row=0, col=0, text="x", appearance=appearance())
        names = [command[0] for command in TableRenderer().cell_commands(record)]
        assert not [name for name in names if name.startswith("LINE")]

    def test_paragraph_style(self):
        renderer = TableRenderer()
        style = renderer.paragraph_style(
            appearance(
                font=FontDescriptor(size=12.0, bold=True, italic=True, color=(255, 0, 0)),
                horizontal=HorizontalAlignment.RIGHT,
            )
        )
        assert style.fontName == "Helvetica-BoldOblique"
        assert style.fontSize == 12.0
        assert style.leading == pytest.approx(14.4)
        assert style.alignment == TA_RIGHT
        assert style.textColor == colors.Color(1, 0, 0)

    def test_paragraph_styles_are_shared(self):
        renderer = TableRenderer()
        first = renderer.paragraph_style(appearance(horizontal=HorizontalAlignment.CENTER))
        second = renderer.paragraph_style(appearance(horizontal=HorizontalAlignment.CENTER))
        assert first is second
        assert first.alignment == TA_CENTER

    def test_tiny_fonts_are_clamped(self):
        style = TableRenderer().paragraph_style(appearance(font=FontDescriptor(size=0.2)))
        assert style.fontSize == 1.0

    def test_underlined_text(self):
        record = CellRecord(
            row=0, col=0, text="link", appearance=appearance(font=FontDescriptor(size=10.0, underline=True))
        )
        value = TableRenderer().cell_value(record)
        assert isinstance(value, Paragraph)
        assert "<u>" in value.text


class TestImageLayer:
    """Test cases for ImageLayer and OverlayTable splitting."""

    def test_draws_between(self, png_bytes):
        layer = ImageLayer.for_rows([image_draw(0, png_bytes), image_draw(5, png_bytes)], [10.0] * 8)
        assert [draw.row for draw in layer.draws_between(0, 5)] == [0]
        assert [draw.row for draw in layer.draws_between(5, 3)] == [5]
        assert layer.row_offsets[-1] == pytest.approx(80.0)

    def test_split_pieces_keep_overlays(self, png_bytes):
        heights = [20.0] * 10
        layer = ImageLayer.for_rows([image_draw(7, png_bytes)], heights)
        table = OverlayTable([["x"] for _ in heights], colWidths=[100.0], rowHeights=heights, overlays=layer)

        pieces = table.split(1000, 100)

        assert len(pieces) == 2
        assert [piece.first_row for piece in pieces] == [0, 5]
        assert all(piece.overlays is layer for piece in pieces)
        assert layer.draws_between(pieces[1].first_row, len(pieces[1]._cellvalues))[0].row == 7

    def test_nested_split_continues_row_count(self, png_bytes):
        heights = [20.0] * 12
        table = OverlayTable([["x"] for _ in heights], colWidths=[100.0], rowHeights=heights)
        _, rest = table.split(1000, 100)
        _, last = rest.split(1000, 100)
        assert last.first_row == 10


class TestImageRenderer:
    """Test cases for ImageRenderer."""

    def test_draws_on_canvas(self, png_bytes):
        canvas = Mock()
        ImageRenderer(canvas).draw(image_draw(0, png_bytes, width=30.0, height=15.0), 5.0, 6.0)

        canvas.drawImage.assert_called_once()
        args, kwargs = canvas.drawImage.call_args
        assert args[1:] == (5.0, 6.0)
        assert (kwargs["width"], kwargs["height"]) == (30.0, 15.0)

    def test_unreadable_image_raises(self):
        canvas = Mock()
        with pytest.raises(RenderingError):
            ImageRenderer(canvas).draw(image_draw(0, b"junk"), 0.0, 0.0)
        canvas.drawImage.assert_not_called()
