"""Error taxonomy for the notation parser.

Every error derives from ParseError, itself a ValueError, and carries the
location of the offending input where one is known.
"""

from __future__ import annotations


class ParseError(ValueError):
    """Raised when the input cannot be turned into a Diagram.

    Attributes:
        message: Description of the failure without location.
        offset: 0-based character offset into the input, or None.
        line: 1-based line number, or None.
        column: 1-based column number, or None.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        if line is not None and column is not None:
            super().__init__(f"line {line}, column {column}: {message}")
        else:
            super().__init__(message)
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column


class LexError(ParseError):
    """No token matches at the current position."""


class GrammarError(ParseError):
    """The token stream does not match any production."""


class LiteralError(ParseError):
    """A lexically valid literal failed to decode (range, unit)."""
