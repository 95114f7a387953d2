"""Structured error types for lexer/parser/runtime separation."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    LEX = "LexError"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    EXPECTED_RIGHT_PAREN = "ExpectedRightParen"
    EXPECTED_RIGHT_BRACKET = "ExpectedRightBracket"
    TRAILING_INPUT = "TrailingInput"
    INDEX_ON_NON_IDENTIFIER = "IndexOnNonIdentifier"
    NOT_WRITABLE = "NotWritable"
    NOT_READABLE = "NotReadable"
    ASSIGN_TO_MAP_NAME = "AssignToMapName"
    MAP_NOT_FOUND = "MapNotFound"


class CalcError(Exception):
    """Base class for structured exprcalc errors."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CalcSyntaxError(CalcError):
    """Failure located at a span of the source text."""

    def __init__(
        self,
        message: str,
        start: int,
        end: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected_text}{found_text}"


class LexError(CalcSyntaxError):
    kind = ErrorKind.LEX


class UnexpectedTokenError(CalcSyntaxError):
    kind = ErrorKind.UNEXPECTED_TOKEN


class ExpectedRightParenError(CalcSyntaxError):
    kind = ErrorKind.EXPECTED_RIGHT_PAREN


class ExpectedRightBracketError(CalcSyntaxError):
    kind = ErrorKind.EXPECTED_RIGHT_BRACKET


class TrailingInputError(CalcSyntaxError):
    kind = ErrorKind.TRAILING_INPUT


class IndexOnNonIdentifierError(CalcSyntaxError):
    """Postfix ``[...]`` applied to something other than a bare name."""

    kind = ErrorKind.INDEX_ON_NON_IDENTIFIER


class CalcRuntimeError(CalcError):
    """Failure while reading or writing a value after a successful parse step."""


class NotWritableError(CalcRuntimeError):
    kind = ErrorKind.NOT_WRITABLE


class NotReadableError(CalcRuntimeError):
    kind = ErrorKind.NOT_READABLE


class AssignToMapNameError(CalcRuntimeError):
    kind = ErrorKind.ASSIGN_TO_MAP_NAME

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot assign a scalar to map name {name!r}")
        self.name = name


class MapNotFoundError(CalcRuntimeError):
    kind = ErrorKind.MAP_NOT_FOUND

    def __init__(self, name: str) -> None:
        super().__init__(f"Map {name!r} not found")
        self.name = name


def classify_error(err: BaseException) -> ErrorKind | None:
    """Return the taxonomy kind of ``err``, or ``None`` for foreign exceptions."""
    if isinstance(err, CalcError):
        return getattr(type(err), "kind", None)
    return None
