"""Recursive-descent parser that evaluates while it parses.

Precedence, loosest first: assignment, additive, multiplicative, unary,
power (its left operand is a unary), postfix index, atom. Every level returns
a value from :mod:`exprcalc.values`; combining levels read their operands
eagerly and produce a :class:`Scalar`, so only bare names, map entries and
parenthesised bare names stay writable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from . import numeric
from .context import EvaluationContext
from .errors import (
    CalcError,
    CalcSyntaxError,
    ExpectedRightBracketError,
    ExpectedRightParenError,
    IndexOnNonIdentifierError,
    TrailingInputError,
    UnexpectedTokenError,
)
from .lexer import Token, TokenStream
from .values import Identifier, IndexedReference, NoneValue, Scalar, Value

logger = logging.getLogger(__name__)

MAP_DECLARATION_KEYWORD = "defmap"

_ATOM_EXPECTED = ("NUMBER", "NAME", "LPAREN")


class TokenSource(Protocol):
    def current(self) -> Token:
        ...

    def advance(self) -> None:
        ...


@dataclass
class _Parser:
    stream: TokenSource
    context: EvaluationContext

    def _peek(self) -> Token:
        return self.stream.current()

    def _advance(self) -> Token:
        tok = self.stream.current()
        self.stream.advance()
        return tok

    def _check(self, kind: str) -> bool:
        return self._peek().kind == kind

    def _error(
        self,
        error_type: type[CalcSyntaxError],
        message: str,
        *,
        tok: Token | None = None,
        expected: tuple[str, ...] = (),
    ) -> CalcSyntaxError:
        token = tok if tok is not None else self._peek()
        return error_type(message, token.pos, token.end, expected=expected, found=token.describe())

    def _read(self, value: Value) -> float:
        return value.read(self.context)

    def statement(self) -> Value:
        tok = self._peek()
        if tok.kind == "KEYWORD" and tok.text == MAP_DECLARATION_KEYWORD:
            return self.declare_map_statement()
        return self.expression()

    def declare_map_statement(self) -> Value:
        self._advance()
        tok = self._peek()
        if tok.kind != "NAME":
            raise self._error(UnexpectedTokenError, "Map declaration needs a name", expected=("NAME",))
        self.context.declare_map(tok.text)
        logger.debug("declared map %r", tok.text)
        self._advance()
        return NoneValue()

    def expression(self) -> Value:
        return self.assignment()

    def assignment(self) -> Value:
        value = self.addsub()
        if self._check("EQ"):
            self._advance()
            rhs = self._read(self.assignment())
            value.write(rhs, self.context)
            value = Scalar(rhs)
        return value

    def addsub(self) -> Value:
        value = self.muldiv()
        while True:
            tok = self._peek()
            if tok.kind == "PLUS":
                left = self._read(value)
                self._advance()
                value = Scalar(numeric.add(left, self._read(self.muldiv())))
            elif tok.kind == "MINUS":
                left = self._read(value)
                self._advance()
                value = Scalar(numeric.subtract(left, self._read(self.muldiv())))
            else:
                return value

    def muldiv(self) -> Value:
        # Right operands re-enter muldiv, so 8/4/2 groups as 8/(4/2).
        value = self.power()
        while True:
            tok = self._peek()
            if tok.kind == "STAR":
                left = self._read(value)
                self._advance()
                value = Scalar(numeric.multiply(left, self._read(self.muldiv())))
            elif tok.kind == "SLASH":
                left = self._read(value)
                self._advance()
                value = Scalar(numeric.divide(left, self._read(self.muldiv())))
            else:
                return value

    def power(self) -> Value:
        value = self.unary()
        if self._check("DSTAR"):
            self._advance()
            base = self._read(value)
            exponent = self._read(self.power())
            value = Scalar(numeric.power(base, exponent))
        return value

    def unary(self) -> Value:
        tok = self._peek()
        if tok.kind == "PLUS":
            self._advance()
            return Scalar(self._read(self.unary()))
        if tok.kind == "MINUS":
            self._advance()
            return Scalar(numeric.negate(self._read(self.unary())))
        return self.primary()

    def primary(self) -> Value:
        value = self.atom()
        if not self._check("LBRACK"):
            return value
        if not isinstance(value, Identifier):
            raise self._error(IndexOnNonIdentifierError, "Only a name can be indexed")
        self._advance()
        index = Scalar(self._read(self.expression()))
        if not self._check("RBRACK"):
            raise self._error(ExpectedRightBracketError, "Expecting right bracket", expected=("RBRACK",))
        self._advance()
        return IndexedReference.from_identifier(value, index)

    def atom(self) -> Value:
        tok = self._peek()
        if tok.kind == "LPAREN":
            self._advance()
            value = self.expression()
            if not self._check("RPAREN"):
                raise self._error(ExpectedRightParenError, "Expecting right paren", expected=("RPAREN",))
            self._advance()
            return value
        if tok.kind == "NUMBER":
            self._advance()
            return Scalar(tok.number)
        if tok.kind == "NAME":
            self._advance()
            return Identifier(tok.text)
        raise self._error(UnexpectedTokenError, "Unexpected token", tok=tok, expected=_ATOM_EXPECTED)

    def expect_end(self) -> None:
        if not self._check("EOF"):
            raise self._error(TrailingInputError, "Unexpected input after end of statement", expected=("EOF",))


def _as_stream(source: str | TokenSource) -> TokenSource:
    if isinstance(source, str):
        stream = TokenStream(source)
        stream.prepare()
        return stream
    return source


def _describe(source: str | TokenSource) -> str:
    return source if isinstance(source, str) else f"<{type(source).__name__}>"


def evaluate_expression(context: EvaluationContext, source: str | TokenSource) -> float:
    """Parse and evaluate one expression; the whole input must be consumed."""
    logger.debug("expression %r", _describe(source))
    try:
        parser = _Parser(_as_stream(source), context)
        value = parser.expression()
        parser.expect_end()
        return value.read(context)
    except CalcError as err:
        logger.debug("expression %r failed: %s", _describe(source), err)
        raise


def evaluate_statement(context: EvaluationContext, source: str | TokenSource) -> float | None:
    """Like :func:`evaluate_expression` but also accepts ``@defmap name``.

    Returns ``None`` when the statement produced no value.
    """
    logger.debug("statement %r", _describe(source))
    try:
        parser = _Parser(_as_stream(source), context)
        value = parser.statement()
        parser.expect_end()
        if isinstance(value, NoneValue):
            return None
        return value.read(context)
    except CalcError as err:
        logger.debug("statement %r failed: %s", _describe(source), err)
        raise
