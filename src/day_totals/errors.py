# errors.py
"""
Custom exceptions used across day-totals modules.
"""
from typing import Optional


class DayTotalsError(RuntimeError):
    """Base class for all validation failures."""
    pass


class DateFormatError(DayTotalsError):
    """Raised when a date string matches neither YYYY-MM-DD nor MM-DD."""
    pass


class InvalidArgumentError(DayTotalsError):
    """Raised when a resolved parameter is out of range or inconsistent."""
    pass


class MalformedInputError(DayTotalsError):
    """Raised when a ranges line cannot be turned into a Range."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
