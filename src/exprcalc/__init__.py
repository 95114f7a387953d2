"""exprcalc public API."""

from .context import EvaluationContext
from .errors import (
    AssignToMapNameError,
    CalcError,
    CalcRuntimeError,
    CalcSyntaxError,
    ErrorKind,
    ExpectedRightBracketError,
    ExpectedRightParenError,
    IndexOnNonIdentifierError,
    LexError,
    MapNotFoundError,
    NotReadableError,
    NotWritableError,
    TrailingInputError,
    UnexpectedTokenError,
)
from .evaluator import Session, evaluate, evaluate_block
from .lexer import Token, TokenStream, tokenize
from .parser import evaluate_expression, evaluate_statement

__all__ = [
    "evaluate",
    "evaluate_block",
    "evaluate_expression",
    "evaluate_statement",
    "EvaluationContext",
    "Session",
    "Token",
    "TokenStream",
    "tokenize",
    "ErrorKind",
    "CalcError",
    "CalcSyntaxError",
    "CalcRuntimeError",
    "LexError",
    "UnexpectedTokenError",
    "ExpectedRightParenError",
    "ExpectedRightBracketError",
    "TrailingInputError",
    "IndexOnNonIdentifierError",
    "NotWritableError",
    "NotReadableError",
    "AssignToMapNameError",
    "MapNotFoundError",
]
