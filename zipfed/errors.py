"""Errors raised by the zipfed loader, store and CLI."""

from __future__ import annotations

from typing import Optional


class ZipfedError(Exception):
    """Base error for this package."""


class UsageError(ZipfedError):
    """Raised when the command line is malformed."""


class OpenError(ZipfedError):
    """Raised when an input or output file cannot be opened."""

    def __init__(self, path: str, role: str, reason: str = "") -> None:
        self.path = path
        self.role = role
        msg = f"cannot open {path} for {role}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class IoError(ZipfedError):
    """Raised when reading or writing an already-open stream fails."""


class ParseError(ZipfedError, ValueError):
    """Raised when an input line cannot be parsed into a record."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.message = message
        self.line_number = line_number
        super().__init__(message)

    def at_line(self, line_number: int) -> "ParseError":
        self.line_number = line_number
        return self

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class EmptyLine(ParseError):
    pass


class HeaderRow(ParseError):
    pass


class TruncatedRecord(ParseError):
    pass


class InvalidNumeric(ParseError):
    pass
