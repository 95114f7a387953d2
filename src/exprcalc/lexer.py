"""Pull-based tokenization for the calculator language."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import LexError


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int

    @property
    def number(self) -> float:
        if self.kind != "NUMBER":
            raise TypeError(f"Token {self.kind} carries no numeric literal")
        return float(self.text)

    def describe(self) -> str:
        if self.kind == "EOF":
            return "EOF"
        if self.text:
            return f"{self.kind}({self.text})"
        return self.kind


_SINGLE_TOKENS = {
    "+": "PLUS",
    "-": "MINUS",
    "/": "SLASH",
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACK",
    "]": "RBRACK",
    "=": "EQ",
}

_WHITESPACE = {" ", "\t", "\r", "\n", "\f", "\v"}


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ident_continue(ch: str) -> bool:
    return _is_ident_start(ch) or ch.isdigit()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _scan_while(source: str, start: int, predicate) -> tuple[str, int]:
    i = start
    while i < len(source) and predicate(source[i]):
        i += 1
    return source[start:i], i


def _scan_number(source: str, start: int) -> tuple[str, int]:
    i = start
    if source[i] == ".":
        i += 1
        frac_start = i
        _, i = _scan_while(source, i, _is_digit)
        if i == frac_start:
            raise LexError(f"Invalid numeric literal {source[start:i]!r} at index {start}", start, i)
        return source[start:i], i

    _, i = _scan_while(source, i, _is_digit)
    if i < len(source) and source[i] == ".":
        i += 1
        _, i = _scan_while(source, i, _is_digit)
    return source[start:i], i


def _scan_token(source: str, start: int) -> Token:
    i = start
    while i < len(source) and source[i] in _WHITESPACE:
        i += 1

    if i >= len(source):
        return Token("EOF", "", len(source), len(source))

    ch = source[i]

    if ch == "*":
        if source.startswith("**", i):
            return Token("DSTAR", "**", i, i + 2)
        return Token("STAR", ch, i, i + 1)

    if ch in _SINGLE_TOKENS:
        return Token(_SINGLE_TOKENS[ch], ch, i, i + 1)

    if _is_digit(ch) or (ch == "." and i + 1 < len(source) and _is_digit(source[i + 1])):
        text, end = _scan_number(source, i)
        return Token("NUMBER", text, i, end)

    if _is_ident_start(ch):
        ident, end = _scan_while(source, i, _is_ident_continue)
        return Token("NAME", ident, i, end)

    if ch == "@":
        if i + 1 < len(source) and _is_ident_start(source[i + 1]):
            ident, end = _scan_while(source, i + 1, _is_ident_continue)
            return Token("KEYWORD", ident, i, end)
        raise LexError(f"Keyword sigil without a name at index {i}", i, i + 1, found=repr(ch))

    raise LexError(f"Unexpected character {ch!r} at index {i}", i, i + 1, found=repr(ch))


class TokenStream:
    """Scans one token at a time; the parser only ever sees ``current()``."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._token: Token | None = None
        self.seen_eof = False

    def prepare(self) -> None:
        if self._token is None:
            self.advance()

    def current(self) -> Token:
        self.prepare()
        assert self._token is not None
        return self._token

    def advance(self) -> None:
        if self._token is not None and self._token.kind == "EOF":
            return
        start = 0 if self._token is None else self._token.end
        self._token = _scan_token(self.source, start)
        if self._token.kind == "EOF":
            self.seen_eof = True

    def __iter__(self):
        while True:
            tok = self.current()
            yield tok
            if tok.kind == "EOF":
                return
            self.advance()


def tokenize(source: str) -> list[Token]:
    return list(TokenStream(source))
