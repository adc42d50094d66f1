"""Exceptions raised while reading S-expressions."""

from __future__ import annotations


class SExpError(Exception):
    """Base class for every error raised by :mod:`sexp`."""


class ReadError(SExpError, OSError):
    """The underlying source could not be read or decoded."""


class ParseError(SExpError, ValueError):
    """The token stream does not form balanced S-expressions.

    Subclasses ``ValueError`` so that code written against the plain
    "malformed input raises ``ValueError``" contract keeps working.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.line = line


class UnbalancedParensError(ParseError):
    """Input ended while one or more groups were still open."""

    def __init__(self, depth: int, line: int | None = None) -> None:
        super().__init__(f"unbalanced parentheses: {depth} group(s) left open", line)
        self.depth = depth


class UnexpectedCloseParenError(ParseError):
    """A ``)`` was read with no matching ``(``."""

    def __init__(self, line: int | None = None) -> None:
        super().__init__("unexpected close paren", line)
