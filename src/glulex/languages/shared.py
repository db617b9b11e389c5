"""States and rules shared by the GIL and Glu definitions.

Both languages have the same comment, whitespace, string and numeric
literal syntax; they differ in their root rules and word sets. Each
language builds its state table with ``common_states(root)``.
"""

from __future__ import annotations

import re

from glulex.lexer.rules import (
    Emit,
    EmitGroups,
    Mixin,
    Pop,
    Push,
    Rule,
    StateEntry,
    fallthrough,
)
from glulex.tokens import TokenKind

# Identifiers: a letter or underscore (or any astral-plane character),
# then letters, digits, underscores
ID_HEAD = r"(?:[^\W\d]|[\U00010000-\U0010FFFF])"
ID_REST = r"(?:\w|[\U00010000-\U0010FFFF])"
ID = rf"{ID_HEAD}{ID_REST}*"

_DIGITS = r"\d+(?:_\d+)*"


# Line start: directive comments, then hand back to the main grammar
BOL: tuple[StateEntry, ...] = (
    Rule(r"#(?![#\"/]).*", Emit(TokenKind.COMMENT_PREPROC)),
    Mixin("inline_whitespace"),
    fallthrough(),
)

INLINE_WHITESPACE: tuple[StateEntry, ...] = (
    Rule(r"\s+", Emit(TokenKind.TEXT)),
    Mixin("has_comments"),
)

# Trailing blanks go with the newline so the next line still starts in bol
WHITESPACE: tuple[StateEntry, ...] = (
    Rule(r"[^\S\n]*\n+", Emit(TokenKind.TEXT), Push("bol")),
    Rule(r"//.*?$", Emit(TokenKind.COMMENT_SINGLE), Push("bol")),
    Mixin("inline_whitespace"),
)

HAS_COMMENTS: tuple[StateEntry, ...] = (
    Rule(r"/\*", Emit(TokenKind.COMMENT_MULTILINE), Push("nested_comment")),
)

# Nesting depth is the number of nested_comment entries on the stack
NESTED_COMMENT: tuple[StateEntry, ...] = (
    Mixin("has_comments"),
    Rule(r"\*/", Emit(TokenKind.COMMENT_MULTILINE), Pop()),
    Rule(r"[^*/]+", Emit(TokenKind.COMMENT_MULTILINE)),
    Rule(r".", Emit(TokenKind.COMMENT_MULTILINE)),
)

DOUBLE_QUOTED: tuple[StateEntry, ...] = (
    Rule(r"\\[\\0tnr'\"]", Emit(TokenKind.STRING_ESCAPE)),
    Rule(r"\\\(", Emit(TokenKind.STRING_ESCAPE), Push("interp")),
    Rule(r"\\u\{[0-9A-Fa-f]{1,8}\}", Emit(TokenKind.STRING_ESCAPE)),
    Rule(r"[^\\\"]+", Emit(TokenKind.STRING)),
    Rule(r"\"\"\"", Emit(TokenKind.STRING), Pop()),
    Rule(r"\"", Emit(TokenKind.STRING), Pop()),
)

# \( ... ) inside a string; the closing paren belongs to the string
INTERP: tuple[StateEntry, ...] = (
    Rule(r"\(", Emit(TokenKind.PUNCTUATION), Push("interp_inner")),
    Rule(r"\)", Emit(TokenKind.STRING_ESCAPE), Pop()),
    Mixin("root"),
)

# Parenthesized sub-expressions inside an interpolation
INTERP_INNER: tuple[StateEntry, ...] = (
    Rule(r"\(", Emit(TokenKind.PUNCTUATION), Push()),
    Rule(r"\)", Emit(TokenKind.PUNCTUATION), Pop()),
    Mixin("root"),
)


# Root rules common to both languages, in the order they appear there

MEMBER_ACCESS = Rule(rf"(\.)({ID})", EmitGroups(TokenKind.OPERATOR, TokenKind.NAME_VARIABLE))

NAMESPACE = Rule(
    rf"({ID})(\s*)(::)",
    EmitGroups(TokenKind.NAME_NAMESPACE, TokenKind.TEXT, TokenKind.PUNCTUATION),
)

SPECIAL_OPERATORS = Rule(r"::|<=>", Emit(TokenKind.OPERATOR))

PUNCTUATION = Rule(r"[()\[\]{}:;,?\\]", Emit(TokenKind.PUNCTUATION))

STRINGS: tuple[Rule, ...] = (
    Rule(r"\"", Emit(TokenKind.STRING), Push("dq")),
    Rule(r"'(?:\\.|.)'", Emit(TokenKind.STRING_CHAR)),
)

NUMBERS: tuple[Rule, ...] = (
    Rule(
        rf"(?:{_DIGITS})?\.\d+(?:_\d+)*(?:e[+-]?{_DIGITS})?",
        Emit(TokenKind.NUMBER_FLOAT),
        flags=re.IGNORECASE,
    ),
    Rule(rf"{_DIGITS}e[+-]?{_DIGITS}", Emit(TokenKind.NUMBER_FLOAT), flags=re.IGNORECASE),
    Rule(r"0o?[0-7]+(?:_[0-7]+)*", Emit(TokenKind.NUMBER_OCT)),
    Rule(
        r"0x[0-9A-Fa-f]+(?:_[0-9A-Fa-f]+)*"
        r"(?:(?:\.[0-9A-Fa-f]+(?:_[0-9A-Fa-f]+)*)?p[+-]?\d+)?",
        Emit(TokenKind.NUMBER_HEX),
    ),
    Rule(r"0b[01]+(?:_[01]+)*", Emit(TokenKind.NUMBER_BIN)),
    Rule(_DIGITS, Emit(TokenKind.NUMBER_INTEGER)),
)

DIRECTIVE_KEYWORD = Rule(rf"#{ID}", Emit(TokenKind.KEYWORD))


def operators(chars: str) -> Rule:
    """Runs of operator characters; ``chars`` is a character-class body."""
    return Rule(rf"[{chars}]+", Emit(TokenKind.OPERATOR))


def common_states(root: tuple[StateEntry, ...]) -> dict[str, tuple[StateEntry, ...]]:
    """Full state table around a language-specific ``root``."""
    return {
        "root": root,
        "bol": BOL,
        "inline_whitespace": INLINE_WHITESPACE,
        "whitespace": WHITESPACE,
        "has_comments": HAS_COMMENTS,
        "nested_comment": NESTED_COMMENT,
        "dq": DOUBLE_QUOTED,
        "interp": INTERP,
        "interp_inner": INTERP_INNER,
    }
