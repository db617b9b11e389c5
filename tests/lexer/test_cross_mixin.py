"""Tests for constructs nested across mixed-in states.

Interpolations mix the whole root grammar back in, and every state that
includes whitespace also includes block comments. These tests verify the
shared rules behave the same wherever they are spliced in.
"""

import pytest

from glulex import GIL, GLU, Lexer
from glulex.tokens import TokenKind


def _pairs(source: str, definition=GLU) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.value) for t in Lexer(source, definition).tokenize()]


class TestCommentsInsideInterpolation:
    def test_block_comment_in_interpolation(self) -> None:
        pairs = _pairs('"\\(a /* c */)"')

        assert (TokenKind.COMMENT_MULTILINE, "/*") in pairs
        assert pairs[-2:] == [(TokenKind.STRING_ESCAPE, ")"), (TokenKind.STRING, '"')]

    def test_comment_hides_closing_paren(self) -> None:
        lexer = Lexer('"\\(a /* ) */)"', GLU)
        pairs = [(t.kind, t.value) for t in lexer.tokenize()]

        assert (TokenKind.COMMENT_MULTILINE, " ) ") in pairs
        assert lexer.stack == ("root",)


class TestStringsInsideComments:
    def test_quote_in_comment_is_comment(self) -> None:
        pairs = _pairs('/* "not a string */ x')

        assert all(kind is not TokenKind.STRING for kind, _ in pairs)
        assert pairs[-1] == (TokenKind.NAME, "x")


class TestRootGrammarInInterpolation:
    @pytest.mark.parametrize(
        "inner,kind",
        [
            ("0x10", TokenKind.NUMBER_HEX),
            ("MAX", TokenKind.NAME_CONSTANT),
            ("Point", TokenKind.NAME_CLASS),
            ("true", TokenKind.KEYWORD_CONSTANT),
            ("$0", TokenKind.NAME_VARIABLE),
            ("'c'", TokenKind.STRING_CHAR),
        ],
    )
    def test_root_rules_apply(self, inner: str, kind: TokenKind) -> None:
        pairs = _pairs(f'"\\({inner})"')
        assert pairs[2] == (kind, inner)

    def test_string_inside_interpolation(self) -> None:
        pairs = _pairs('"\\("in")"')

        assert pairs == [
            (TokenKind.STRING, '"'),
            (TokenKind.STRING_ESCAPE, "\\("),
            (TokenKind.STRING, '"'),
            (TokenKind.STRING, "in"),
            (TokenKind.STRING, '"'),
            (TokenKind.STRING_ESCAPE, ")"),
            (TokenKind.STRING, '"'),
        ]

    def test_gil_interpolation_uses_gil_root(self) -> None:
        pairs = _pairs('"\\(%0)"', GIL)
        assert pairs[2] == (TokenKind.NAME_VARIABLE, "%0")


class TestLineStartAfterMixins:
    def test_newline_inside_interpolation_reaches_line_start(self) -> None:
        pairs = _pairs('"\\(a\n#x)"')

        # The newline rule is mixed into the interpolation via root
        assert (TokenKind.COMMENT_PREPROC, "#x)\"") in pairs
