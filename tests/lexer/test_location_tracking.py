"""Tests for accurate source location tracking in the scanner.

Token locations let editors map highlighted spans back to the buffer.
These tests verify that line numbers, columns and offsets are tracked.
"""

from glulex import GIL, Lexer, tokenize
from glulex.location import SourceLocation
from glulex.tokens import TokenKind


class TestSingleLineLocations:
    def test_first_token(self) -> None:
        token = next(tokenize("let x = 1", "glu"))
        assert token.location.lineno == 1
        assert token.location.col_offset == 1
        assert token.location.offset == 0
        assert token.location.end_offset == 3

    def test_columns_advance_by_token_length(self) -> None:
        tokens = list(tokenize("let x = 1", "glu"))
        assert [t.col for t in tokens] == [1, 4, 5, 6, 7, 8, 9]


class TestMultiLineLocations:
    def test_tokens_after_newline(self) -> None:
        tokens = list(tokenize("let x\n  y", "glu"))
        values = [(t.value, t.lineno, t.col) for t in tokens]

        assert values == [
            ("let", 1, 1),
            (" ", 1, 4),
            ("x", 1, 5),
            ("\n", 1, 6),
            ("  ", 2, 1),
            ("y", 2, 3),
        ]

    def test_multiline_comment_spans_lines(self) -> None:
        tokens = list(tokenize("/* a\nb */ c", "gil"))
        last = tokens[-1]

        assert last.value == "c"
        assert last.lineno == 2
        assert last.col == 6

    def test_token_after_blank_lines(self) -> None:
        tokens = list(tokenize("\n\n\nfunc", "gil"))
        func = tokens[-1]

        assert func.kind is TokenKind.KEYWORD_DECLARATION
        assert func.lineno == 4
        assert func.col == 1
        assert func.offset == 3


class TestSourceFile:
    def test_source_file_in_location(self) -> None:
        tokens = list(Lexer("%0", GIL, source_file="main.gil").tokenize())
        assert str(tokens[0].location) == "main.gil:1:1"

    def test_location_without_file(self) -> None:
        assert str(SourceLocation(lineno=3, col_offset=7)) == "3:7"

    def test_location_is_cached(self) -> None:
        token = next(tokenize("x", "glu"))
        assert token.location is token.location

    def test_length(self) -> None:
        token = next(tokenize("struct", "glu"))
        assert token.location.length == 6
