"""Base classes and interfaces for sheet renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Iterable, Tuple, Union

from reportlab.lib.pagesizes import A4, landscape

from ..engine.geometry import Margins, Size
from ..engine.layout_primitives import SheetLayout

PageSize = Union[Size, Iterable[float]]


def ensure_page_size(page_size: PageSize) -> Tuple[float, float]:
    if isinstance(page_size, Size):
        return float(page_size.width), float(page_size.height)
    values = list(page_size)
    if len(values) != 2:
        raise ValueError("Page size iterable must contain exactly two values")
    return float(values[0]), float(values[1])


def ensure_margins(margins: Union[Margins, float, Iterable[float]]) -> Margins:
    if isinstance(margins, Margins):
        return margins
    if isinstance(margins, (int, float)):
        return Margins.uniform(float(margins))
    values = [float(value) for value in margins]
    if len(values) != 4:
        raise ValueError("Margins must be provided as four numeric values (top, right, bottom, left)")
    top, right, bottom, left = values
    return Margins(top=top, bottom=bottom, left=left, right=right)


class IRenderer(ABC):
    """Interface for renderer implementations."""

    @abstractmethod
    def render(self, layout: SheetLayout, output: BinaryIO) -> None:
        """Render a sheet layout into the provided binary stream."""


class BaseRenderer(IRenderer):
    """Common page geometry shared by concrete renderer implementations."""

    def __init__(
        self,
        page_size: PageSize = landscape(A4),
        margins: Union[Margins, float, Iterable[float]] = 36.0,
    ) -> None:
        width, height = ensure_page_size(page_size)
        self.page_size = (width, height)
        self.page_width = width
        self.page_height = height
        self.margins = ensure_margins(margins)

    def render(self, layout: SheetLayout, output: BinaryIO) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @property
    def content_width(self) -> float:
        return max(self.page_width - self.margins.horizontal, 0.0)

    @property
    def content_height(self) -> float:
        return max(self.page_height - self.margins.vertical, 0.0)
