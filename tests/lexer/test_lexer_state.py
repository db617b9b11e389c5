"""Tests ensuring the state stack is consistent after tokenization.

Balanced constructs must leave the stack exactly where they found it,
so state never leaks from one construct into the text that follows.
"""

from __future__ import annotations

import pytest

from glulex import GIL, GLU, Lexer


def _final_stack(source: str, definition=GLU) -> tuple[str, ...]:
    lexer = Lexer(source, definition)
    list(lexer.tokenize())
    return lexer.stack


class TestLineStartState:
    def test_prelude_pushes_line_start_state(self) -> None:
        assert Lexer("x", GLU).stack == ("root", "bol")

    def test_line_start_state_is_left_after_first_token(self) -> None:
        assert _final_stack("x") == ("root",)

    def test_newline_reenters_line_start_state(self) -> None:
        assert _final_stack("x\n") == ("root", "bol")
        assert _final_stack("x \t\n") == ("root", "bol")

    def test_line_comment_reenters_line_start_state(self) -> None:
        assert _final_stack("x // note") == ("root", "bol")
        assert _final_stack("x // note\ny") == ("root",)


class TestBalancedConstructs:
    @pytest.mark.parametrize(
        "source",
        [
            "x = /* a /* b */ c */",
            'x = "plain"',
            'x = "a\\(b)c"',
            'x = "x\\((f(1,2)))"',
            'x = "\\(("nested \\(y)"))"',
            "x = 'c'",
        ],
    )
    def test_glu_returns_to_root(self, source: str) -> None:
        assert _final_stack(source) == ("root",)

    @pytest.mark.parametrize(
        "source",
        [
            "%0 = integer_literal 1 /* note */",
            '%1 = string_literal "a\\(b)"',
        ],
    )
    def test_gil_returns_to_root(self, source: str) -> None:
        assert _final_stack(source, GIL) == ("root",)


class TestStatesAreIsolated:
    def test_each_lexer_has_its_own_stack(self) -> None:
        first = Lexer("x /* open", GLU)
        second = Lexer("y", GLU)
        list(first.tokenize())
        list(second.tokenize())

        assert first.stack[-1] == "nested_comment"
        assert second.stack == ("root",)
