from __future__ import annotations

import unittest

from exprcalc.errors import LexError
from exprcalc.lexer import TokenStream, tokenize


class LexerTests(unittest.TestCase):
    def _tokens(self, source: str, *, with_spans: bool = False):
        if with_spans:
            return [(tok.kind, tok.text, tok.pos, tok.end) for tok in tokenize(source) if tok.kind != "EOF"]
        return [(tok.kind, tok.text) for tok in tokenize(source) if tok.kind != "EOF"]

    def test_token_golden_operators_and_spans(self) -> None:
        tokens = self._tokens("+-*/**()[]=", with_spans=True)
        self.assertEqual(
            tokens,
            [
                ("PLUS", "+", 0, 1),
                ("MINUS", "-", 1, 2),
                ("STAR", "*", 2, 3),
                ("SLASH", "/", 3, 4),
                ("DSTAR", "**", 4, 6),
                ("LPAREN", "(", 6, 7),
                ("RPAREN", ")", 7, 8),
                ("LBRACK", "[", 8, 9),
                ("RBRACK", "]", 9, 10),
                ("EQ", "=", 10, 11),
            ],
        )

    def test_separated_stars_are_two_tokens(self) -> None:
        self.assertEqual(
            self._tokens("2* *2"),
            [("NUMBER", "2"), ("STAR", "*"), ("STAR", "*"), ("NUMBER", "2")],
        )

    def test_names_numbers_and_keywords(self) -> None:
        tokens = self._tokens("@defmap zz_1 \t 42 3.5 .25")
        self.assertEqual(
            tokens,
            [
                ("KEYWORD", "defmap"),
                ("NAME", "zz_1"),
                ("NUMBER", "42"),
                ("NUMBER", "3.5"),
                ("NUMBER", ".25"),
            ],
        )
        numbers = [tok.number for tok in tokenize("42 3.5 .25") if tok.kind == "NUMBER"]
        self.assertEqual(numbers, [42.0, 3.5, 0.25])

    def test_number_property_rejects_non_numbers(self) -> None:
        tok = tokenize("abc")[0]
        with self.assertRaises(TypeError):
            _ = tok.number

    def test_empty_and_blank_input_is_just_eof(self) -> None:
        for source in ("", "   \n\t"):
            with self.subTest(source=source):
                tokens = tokenize(source)
                self.assertEqual([tok.kind for tok in tokens], ["EOF"])
                self.assertEqual(tokens[0].pos, len(source))

    def test_unexpected_character_raises_lex_error_with_span(self) -> None:
        with self.assertRaises(LexError) as cm:
            tokenize("2 $")
        self.assertEqual((cm.exception.start, cm.exception.end), (2, 3))
        self.assertIn("'$'", str(cm.exception))

    def test_bare_keyword_sigil_is_rejected(self) -> None:
        with self.assertRaises(LexError):
            tokenize("@ 1")

    def test_stream_scans_lazily(self) -> None:
        stream = TokenStream("2$")
        self.assertEqual(stream.current().kind, "NUMBER")
        with self.assertRaises(LexError):
            stream.advance()

    def test_stream_advance_is_idempotent_at_end(self) -> None:
        stream = TokenStream("x")
        stream.prepare()
        self.assertFalse(stream.seen_eof)
        stream.advance()
        self.assertTrue(stream.seen_eof)
        for _ in range(3):
            stream.advance()
            self.assertEqual(stream.current().kind, "EOF")

    def test_describe_formats_found_token(self) -> None:
        name, eof = tokenize("abc")
        self.assertEqual(name.describe(), "NAME(abc)")
        self.assertEqual(eof.describe(), "EOF")


if __name__ == "__main__":
    unittest.main()
