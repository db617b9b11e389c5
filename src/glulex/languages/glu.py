"""Glu, the surface language.

Adds closure parameters (``$0``), labels (``name:``), attributes
(``@name``), escaped identifiers (`` `name` ``) and call-site detection
on top of the shared grammar.
"""

from __future__ import annotations

from glulex.languages.shared import (
    DIRECTIVE_KEYWORD,
    ID,
    MEMBER_ACCESS,
    NAMESPACE,
    NUMBERS,
    PUNCTUATION,
    SPECIAL_OPERATORS,
    STRINGS,
    common_states,
    operators,
)
from glulex.lexer.classifiers import Classifier
from glulex.lexer.rules import Classify, Emit, EmitGroups, LanguageDefinition, Mixin, Rule
from glulex.tokens import TokenKind

KEYWORDS = frozenset(
    {"as", "break", "continue", "else", "for", "if", "import", "in", "or", "return", "while"}
)

DECLARATIONS = frozenset({"enum", "func", "struct", "operator", "let", "var", "typealias"})

CONSTANTS = frozenset({"true", "false"})

# Keywords that take a parenthesized operand but are not calls
CONTROL_FLOW = frozenset({"if", "while", "for"})

ROOT = (
    Mixin("whitespace"),
    Rule(r"\$(?:[1-9]\d*)?\d", Emit(TokenKind.NAME_VARIABLE)),
    Rule(rf"\${ID}", Emit(TokenKind.NAME)),
    MEMBER_ACCESS,
    NAMESPACE,
    Rule(
        rf"({ID})(\s*)(:)",
        EmitGroups(TokenKind.NAME_VARIABLE, TokenKind.TEXT, TokenKind.PUNCTUATION),
    ),
    SPECIAL_OPERATORS,
    PUNCTUATION,
    operators(r"\-/=+*%<>!&|^.~"),
    *STRINGS,
    *NUMBERS,
    Rule(rf"@{ID}", Emit(TokenKind.KEYWORD_DECLARATION)),
    DIRECTIVE_KEYWORD,
    Rule(ID, Classify(Classifier.CALL)),
    Rule(
        rf"(`)({ID})(`)",
        EmitGroups(TokenKind.PUNCTUATION, TokenKind.NAME_VARIABLE, TokenKind.PUNCTUATION),
    ),
)

GLU = LanguageDefinition(
    name="glu",
    title="Glu",
    description="The Glu programming language (glu-lang.org)",
    states=common_states(ROOT),
    start_state="root",
    prelude=("bol",),
    keywords=KEYWORDS,
    declarations=DECLARATIONS,
    constants=CONSTANTS,
    control_flow=CONTROL_FLOW,
)
