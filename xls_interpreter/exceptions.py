"""Custom exceptions for XLS Interpreter."""

from typing import Any, Optional


class XlsInterpreterError(Exception):
    """Base exception for XLS Interpreter errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ParsingError(XlsInterpreterError):
    """Exception raised when the spreadsheet container cannot be decoded."""

    pass


class EmptySheetError(XlsInterpreterError):
    """Exception raised when the sheet has no rows or no used column."""

    pass


class DegenerateSheetError(XlsInterpreterError):
    """Exception raised when the sheet has no measurable width."""

    pass


class InvalidMergeRegionError(XlsInterpreterError):
    """Exception raised for merged regions outside the sheet or overlapping another one."""

    def __init__(self, message: str, region: Any = None, details: Optional[str] = None):
        super().__init__(message, details)
        self.region = region


class UnsupportedStyleError(XlsInterpreterError):
    """Exception raised when a style, font or palette reference cannot be resolved."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        coordinate: Optional[tuple] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message, details)
        self.index = index
        self.coordinate = coordinate


class RenderingError(XlsInterpreterError):
    """Exception raised during PDF rendering."""

    pass


class DocumentIOError(XlsInterpreterError, OSError):
    """Exception raised when the input or output stream fails."""

    def __init__(self, message: str, path: Optional[str] = None, details: Optional[str] = None):
        XlsInterpreterError.__init__(self, message, details)
        self.path = path
