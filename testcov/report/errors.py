"""Exceptions for coverage report handling."""


class ReportError(Exception):
    """Base exception for coverage report errors."""

    pass


class ReportParseError(ReportError):
    """Raised when LCOV text cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        super().__init__(message)


class NoCoverageDataError(ReportError, ZeroDivisionError):
    """Raised when a report tracks no lines at all."""

    def __init__(
        self, message: str = "Coverage report contains no tracked lines"
    ):
        super().__init__(message)
