"""
High-level API for XLSQuill.

Main entry point for users: read worksheet 0 of a legacy ``.xls`` workbook
and write it as a paginated PDF.

Example:
    >>> from xls_interpreter import convert_xls_to_pdf, ConvertOptions
    >>>
    >>> # Bytes of the PDF
    >>> pdf = convert_xls_to_pdf('report.xls')
    >>>
    >>> # Written to a file, portrait A3
    >>> convert_xls_to_pdf('report.xls', 'report.pdf', ConvertOptions(page_size='A3', landscape=False))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .config import ConvertOptions
from .engine.layout_engine import LayoutEngine
from .engine.layout_primitives import SheetLayout
from .exceptions import DocumentIOError
from .models.sheet import Sheet
from .parser.xls_reader import Source, XlsReader
from .renderers.pdf_renderer import PdfRenderer

logger = logging.getLogger(__name__)

Output = Union[str, Path, BinaryIO, None]

__all__ = [
    "XlsToPdfConverter",
    "build_layout",
    "convert_xls_to_pdf",
    "load_sheet",
]


def load_sheet(source: Source, include_pictures: bool = True) -> Sheet:
    """Read worksheet 0 of an ``.xls`` document from a path, bytes or binary stream."""
    return XlsReader(include_pictures=include_pictures).read(source)


def build_layout(sheet: Sheet, options: Optional[ConvertOptions] = None) -> SheetLayout:
    """Lay out ``sheet`` for the page described by ``options``."""
    return LayoutEngine.from_options(options or ConvertOptions()).build(sheet)


class XlsToPdfConverter:
    """
    One conversion session: read, lay out, render, write.

    ``completed`` becomes True only after the whole PDF has been written.
    When the output is a path, the PDF is first written next to it under a
    temporary name and moved into place on success; a failed conversion
    leaves no partial file behind.

    Examples:
        >>> converter = XlsToPdfConverter('report.xls', 'out/report.pdf')
        >>> converter.convert()
        PosixPath('out/report.pdf')
        >>> converter.completed
        True
    """

    def __init__(self, source: Source, output: Output = None, options: Optional[ConvertOptions] = None) -> None:
        self.source = source
        self.output = output
        self.options = options or ConvertOptions()
        self.completed = False
        self.sheet: Optional[Sheet] = None
        self.layout: Optional[SheetLayout] = None

    def load(self) -> Sheet:
        if self.sheet is None:
            self.sheet = load_sheet(self.source, include_pictures=self.options.include_images)
        return self.sheet

    def build_layout(self) -> SheetLayout:
        if self.layout is None:
            self.layout = build_layout(self.load(), self.options)
        return self.layout

    def render(self) -> bytes:
        layout = self.build_layout()
        renderer = PdfRenderer.from_options(self.options, title=self.sheet.name if self.sheet else "")
        return renderer.render_bytes(layout)

    def convert(self) -> Union[bytes, Path]:
        """
        Run the conversion.

        Returns:
            PDF bytes when no output (or a stream) was given, otherwise the output path

        Raises:
            ParsingError, EmptySheetError, DegenerateSheetError, InvalidMergeRegionError,
            UnsupportedStyleError, RenderingError, DocumentIOError
        """
        self.completed = False
        pdf = self.render()

        if self.output is None:
            result: Union[bytes, Path] = pdf
        elif hasattr(self.output, "write"):
            try:
                self.output.write(pdf)
            except OSError as exc:
                raise DocumentIOError("Cannot write output stream", details=str(exc)) from exc
            result = pdf
        else:
            result = self._write_file(Path(self.output), pdf)

        self.completed = True
        logger.info(f"Converted {self._describe_source()} ({len(pdf)} bytes of PDF)")
        return result

    @staticmethod
    def _write_file(path: Path, pdf: bytes) -> Path:
        temp_path = path.with_suffix(".tmp.pdf")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "wb") as handle:
                handle.write(pdf)
            temp_path.replace(path)
        except OSError as exc:
            if temp_path.exists():
                temp_path.unlink()
            raise DocumentIOError("Cannot write output document", path=str(path), details=str(exc)) from exc
        return path

    def _describe_source(self) -> str:
        if isinstance(self.source, (str, Path)):
            return str(self.source)
        return f"<{type(self.source).__name__}>"


def convert_xls_to_pdf(
    source: Source,
    output: Output = None,
    options: Optional[ConvertOptions] = None,
) -> Union[bytes, Path]:
    """Convert worksheet 0 of ``source`` to PDF; see :class:`XlsToPdfConverter`."""
    return XlsToPdfConverter(source, output, options).convert()
