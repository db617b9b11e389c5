"""Classifier hooks for identifier-like matches.

Some rules match a broad lexical class and let a hook pick the concrete
kind at match time. The set of hooks is closed: language definitions name
a ``Classifier`` strategy rather than supplying code.

Every hook is a pure function of the matched text, the text that follows
it, and the language definition.
"""

from __future__ import annotations

import re
from enum import Enum, auto
from typing import TYPE_CHECKING

from glulex.tokens import TokenKind

if TYPE_CHECKING:
    from glulex.lexer.rules import LanguageDefinition


class Classifier(Enum):
    """Available classification strategies.

    - SHAPE: case shape only (constant / class / plain name)
    - IDENTIFIER: keyword, declaration and constant sets, then shape
    - CALL: function-call lookahead, then IDENTIFIER

    """

    SHAPE = auto()
    IDENTIFIER = auto()
    CALL = auto()


# An optional ? or ! marker, optional whitespace, then an opening paren
_CALL_LOOKAHEAD = re.compile(r"[?!]?\s*\(")


def classify_shape(text: str, default: TokenKind = TokenKind.NAME) -> TokenKind:
    """Classify by case shape.

    Two or more uppercase letters and nothing else is a constant; a leading
    uppercase letter is a class name; anything else gets ``default``.
    """
    if len(text) >= 2 and all(ch.isupper() for ch in text):
        return TokenKind.NAME_CONSTANT
    if text[:1].isupper():
        return TokenKind.NAME_CLASS
    return default


def classify_membership(text: str, definition: LanguageDefinition) -> TokenKind | None:
    """Look the exact text up in the definition's word sets."""
    if text in definition.keywords:
        return TokenKind.KEYWORD
    if text in definition.declarations:
        return TokenKind.KEYWORD_DECLARATION
    if text in definition.constants:
        return TokenKind.KEYWORD_CONSTANT
    return None


def classify_identifier(text: str, definition: LanguageDefinition) -> TokenKind:
    """Word sets first, case shape as the fallback."""
    kind = classify_membership(text, definition)
    if kind is not None:
        return kind
    return classify_shape(text)


def is_call(text: str, source: str, end: int, definition: LanguageDefinition) -> bool:
    """True if the identifier ending at ``end`` is followed by a call paren.

    Control-flow keywords (``if (x)``) never count as calls.
    """
    if text in definition.control_flow:
        return False
    return _CALL_LOOKAHEAD.match(source, end) is not None


def classify_call(
    text: str, source: str, end: int, definition: LanguageDefinition
) -> TokenKind:
    """Call sites classify by shape with ``Name.Function`` as the default.

    The call check runs before the word sets, so ``return(x)`` in a language
    whose control flow excludes ``return`` reads as a call.
    """
    if is_call(text, source, end, definition):
        return classify_shape(text, TokenKind.NAME_FUNCTION)
    return classify_identifier(text, definition)


def classify(
    strategy: Classifier,
    text: str,
    source: str,
    end: int,
    definition: LanguageDefinition,
) -> TokenKind:
    """Dispatch to the hook named by ``strategy``.

    Args:
        strategy: Which hook to run
        text: The matched lexeme
        source: Full source buffer (read-only, for lookahead)
        end: Offset just past the lexeme
        definition: Language whose word sets apply

    Returns:
        The token kind for the lexeme.
    """
    if strategy is Classifier.SHAPE:
        return classify_shape(text)
    if strategy is Classifier.IDENTIFIER:
        return classify_identifier(text, definition)
    return classify_call(text, source, end, definition)
