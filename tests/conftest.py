"""
Pytest configuration for XLSQuill
"""

import logging
import sys
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence

import pytest
from PIL import Image

from xls_interpreter.models import (
    AnchorPoint,
    CellStyle,
    MergedRegion,
    Picture,
    Sheet,
    build_rows,
)
from xls_interpreter.utils.enums import ImageFormat


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid handlers leaking between tests."""
    package_logger = logging.getLogger("xls_interpreter")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.propagate = True
    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile

    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def make_sheet():
    """
    Factory building a Sheet from plain values.

    ``None`` values become absent cells; every column is 10 characters wide
    and every row 300 twips high unless overridden.
    """

    def _make(
        values: Sequence[Sequence[Optional[str]]],
        *,
        merged: Sequence[MergedRegion] = (),
        styles: Optional[List[CellStyle]] = None,
        pictures: Sequence[Picture] = (),
        column_widths: Optional[List[int]] = None,
        row_height: Optional[int] = 300,
        style_index: int = 0,
    ) -> Sheet:
        rows = build_rows(values, style_index=style_index)
        for row in rows:
            row.height = row_height
        column_count = max((len(row_values) for row_values in values), default=0)
        return Sheet(
            rows=rows,
            styles=styles if styles is not None else [CellStyle()],
            merged_regions=list(merged),
            pictures=list(pictures),
            column_widths=column_widths if column_widths is not None else [2560] * column_count,
        )

    return _make


@pytest.fixture
def minimal_sheet(make_sheet) -> Sheet:
    """Two rows by two columns, no merges, no images."""
    return make_sheet([["a", "b"], ["c", "d"]])


@pytest.fixture
def merged_header_sheet(make_sheet) -> Sheet:
    """Three rows by three columns with row 0 merged across all columns."""
    return make_sheet(
        [["Title", None, None], ["x", "y", "z"], ["1", "2", "3"]],
        merged=[MergedRegion(first_row=0, last_row=0, first_col=0, last_col=2)],
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A 96x48 pixel PNG image."""
    buffer = BytesIO()
    Image.new("RGB", (96, 48), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_picture(png_bytes):
    """Factory for PNG pictures anchored at a cell."""

    def _make(row: int, col: int, *, dx: int = 0, dy: int = 0, end: Optional[AnchorPoint] = None, order: int = 0):
        return Picture(
            anchor=AnchorPoint(row=row, col=col, dx=dx, dy=dy),
            data=png_bytes,
            format=ImageFormat.PNG,
            end=end,
            order=order,
        )

    return _make


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "e2e: marks tests as end-to-end tests")
    # Ignore logging errors during tests
    logging.raiseExceptions = False
