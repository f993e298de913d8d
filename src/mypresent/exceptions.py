"""Custom exceptions for mypresent."""

from __future__ import annotations


class MypresentError(Exception):
    """Base exception for mypresent operations."""


class ParseError(MypresentError):
    """Error during slide document parsing.

    Attributes:
        message: Human readable description of the problem.
        filename: Name of the document being parsed, if known.
        line_number: 1-based line in the document, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.line_number = line_number

    @property
    def located(self) -> bool:
        return self.line_number is not None

    def locate(self, filename: str, line_number: int) -> None:
        """Attach a document position unless one is already present."""
        if self.located:
            return
        self.filename = filename
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"{self.filename}:{self.line_number}: {self.message}"


class UnexpectedEOFError(ParseError):
    """Input ended before a required title was found."""

    def __init__(self, expected: str = "title") -> None:
        super().__init__(f"unexpected EOF; expected {expected}")


class UnexpectedHeaderLineError(ParseError):
    """A second free-text line appeared in the header after the subtitle."""

    def __init__(
        self,
        text: str,
        *,
        filename: str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(
            f"unexpected header line: {text!r}",
            filename=filename,
            line_number=line_number,
        )
        self.text = text


class UnknownDirectiveError(ParseError):
    """A directive line named a directive that is not registered."""

    def __init__(self, directive: str, *, filename: str, line_number: int) -> None:
        super().__init__(
            f"unknown command {directive!r}",
            filename=filename,
            line_number=line_number,
        )
        self.directive = directive


class DirectiveError(ParseError):
    """A directive parser rejected its arguments or could not load its input."""
