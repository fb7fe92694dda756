"""PDF renderer writing a sheet layout through reportlab's platypus."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union

from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate
from reportlab.platypus.doctemplate import LayoutError

from ..engine.geometry import Margins
from ..engine.layout_primitives import SheetLayout
from ..exceptions import RenderingError
from .base_renderer import BaseRenderer, PageSize
from .render_utils import ensure_pdf_font
from .table_renderer import TableRenderer

logger = logging.getLogger(__name__)


class PdfRenderer(BaseRenderer):
    """Render one paginated table (plus image overlays) per document."""

    def __init__(
        self,
        page_size: PageSize = landscape(A4),
        margins: Union[Margins, float, Iterable[float]] = 36.0,
        *,
        font_name: str = "Helvetica",
        font_path: Optional[Union[str, Path]] = None,
        border_width: float = 0.5,
        cell_padding: float = 1.0,
        title: str = "",
    ) -> None:
        super().__init__(page_size, margins)
        self.font_name = font_name
        self.font_path = font_path
        self.border_width = border_width
        self.cell_padding = cell_padding
        self.title = title

    @classmethod
    def from_options(cls, options, title: str = "") -> "PdfRenderer":
        return cls(
            options.pagesize,
            options.margins,
            font_name=options.font_name,
            font_path=options.font_path,
            border_width=options.border_width,
            cell_padding=options.cell_padding,
            title=title,
        )

    def render(self, layout: SheetLayout, output: BinaryIO) -> None:
        """
        Write ``layout`` as a PDF into ``output``.

        Raises:
            RenderingError: If the font cannot be registered or the table cannot be laid out
        """
        font_name = ensure_pdf_font(self.font_name, self.font_path)
        table = TableRenderer(
            font_name=font_name,
            border_width=self.border_width,
            cell_padding=self.cell_padding,
        ).build(layout)

        doc = SimpleDocTemplate(
            output,
            pagesize=self.page_size,
            leftMargin=self.margins.left,
            rightMargin=self.margins.right,
            topMargin=self.margins.top,
            bottomMargin=self.margins.bottom,
            title=self.title,
        )
        try:
            doc.build([table])
        except LayoutError as exc:
            raise RenderingError("Sheet does not fit on the page", details=str(exc)) from exc
        logger.debug(f"PDF written: {doc.page} pages, {self.page_width:.0f}x{self.page_height:.0f}pt")

    def render_bytes(self, layout: SheetLayout) -> bytes:
        buffer = BytesIO()
        self.render(layout, buffer)
        return buffer.getvalue()
