"""
Tests for writing sheet layouts as PDF documents.
"""

import re
from io import BytesIO

import pytest
from reportlab.lib.pagesizes import A4, landscape

from xls_interpreter.config import ConvertOptions
from xls_interpreter.engine.geometry import Margins, Size
from xls_interpreter.engine.layout_engine import LayoutEngine
from xls_interpreter.exceptions import RenderingError
from xls_interpreter.renderers.base_renderer import BaseRenderer, ensure_margins, ensure_page_size
from xls_interpreter.renderers.pdf_renderer import PdfRenderer

PAGE_OBJECT = re.compile(rb"/Type /Page[^s]")


def page_count(pdf: bytes) -> int:
    return len(PAGE_OBJECT.findall(pdf))


class TestPageGeometry:
    """Test cases for page size and margin normalization."""

    def test_page_size_from_tuple_and_size(self):
        assert ensure_page_size((100, 200)) == (100.0, 200.0)
        assert ensure_page_size(Size(300, 400)) == (300.0, 400.0)

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            ensure_page_size((1, 2, 3))

    def test_margins(self):
        assert ensure_margins(10) == Margins.uniform(10.0)
        assert ensure_margins((1, 2, 3, 4)) == Margins(top=1.0, right=2.0, bottom=3.0, left=4.0)
        with pytest.raises(ValueError):
            ensure_margins((1, 2))

    def test_content_area(self):
        renderer = BaseRenderer((800, 600), 50)
        assert renderer.content_width == 700
        assert renderer.content_height == 500

    def test_default_page_is_landscape_a4(self):
        renderer = PdfRenderer()
        assert renderer.page_size == pytest.approx(landscape(A4))
        assert renderer.page_width > renderer.page_height


class TestPdfRenderer:
    """Test cases for PdfRenderer."""

    def test_minimal_sheet(self, minimal_sheet):
        renderer = PdfRenderer()
        layout = LayoutEngine(renderer.content_width).build(minimal_sheet)

        pdf = renderer.render_bytes(layout)

        assert pdf.startswith(b"%PDF")
        assert page_count(pdf) == 1

    def test_render_into_stream(self, minimal_sheet):
        renderer = PdfRenderer()
        output = BytesIO()
        renderer.render(LayoutEngine(renderer.content_width).build(minimal_sheet), output)
        assert output.getvalue().startswith(b"%PDF")

    def test_long_sheet_is_paginated(self, make_sheet):
        sheet = make_sheet([[f"r{row}", "value"] for row in range(200)], column_widths=[20000, 20000])
        renderer = PdfRenderer()
        layout = LayoutEngine(renderer.content_width).build(sheet)

        pdf = renderer.render_bytes(layout)

        assert page_count(pdf) > 1

    def test_pictures_are_embedded(self, make_sheet, make_picture):
        sheet = make_sheet([["a", "b"], ["c", "d"], ["e", "f"]], pictures=[make_picture(2, 1)])
        renderer = PdfRenderer()
        layout = LayoutEngine(renderer.content_width).build(sheet)

        pdf = renderer.render_bytes(layout)

        assert b"/Subtype /Image" in pdf

    def test_picture_on_a_later_page(self, make_sheet, make_picture):
        sheet = make_sheet(
            [[f"r{row}", "value"] for row in range(200)],
            column_widths=[20000, 20000],
            pictures=[make_picture(150, 0)],
        )
        renderer = PdfRenderer()
        pdf = renderer.render_bytes(LayoutEngine(renderer.content_width).build(sheet))

        assert page_count(pdf) > 1
        assert b"/Subtype /Image" in pdf

    def test_merged_and_styled_cells(self, merged_header_sheet):
        renderer = PdfRenderer(font_name="Times-Roman", border_width=1.0, title="Merged")
        pdf = renderer.render_bytes(LayoutEngine(renderer.content_width).build(merged_header_sheet))
        assert pdf.startswith(b"%PDF")
        assert b"Times-Roman" in pdf

    def test_row_taller_than_page_raises(self, make_sheet):
        sheet = make_sheet([["a"], ["b"]], column_widths=[100], row_height=2000)
        renderer = PdfRenderer()
        layout = LayoutEngine(renderer.content_width).build(sheet)

        with pytest.raises(RenderingError):
            renderer.render_bytes(layout)

    def test_unknown_font_raises(self, minimal_sheet):
        renderer = PdfRenderer(font_name="NoSuchFace-Regular")
        with pytest.raises(RenderingError):
            renderer.render_bytes(LayoutEngine(renderer.content_width).build(minimal_sheet))

    def test_from_options(self):
        options = ConvertOptions(page_size="A3", landscape=False, margin=20, border_width=2.0)
        renderer = PdfRenderer.from_options(options, title="Sheet1")

        assert renderer.page_size == pytest.approx(options.pagesize)
        assert renderer.page_width < renderer.page_height
        assert renderer.margins == Margins.uniform(20)
        assert renderer.border_width == 2.0
        assert renderer.title == "Sheet1"
        assert renderer.content_width == pytest.approx(options.frame_width)
