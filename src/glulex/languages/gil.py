"""GIL, the Glu intermediate language.

A low-level SSA form: ``%name`` values, instruction keywords and
declaration keywords. Identifiers are classified by word set, then by
case shape.
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
from glulex.lexer.rules import Classify, Emit, LanguageDefinition, Mixin, Rule
from glulex.tokens import TokenKind

KEYWORDS = frozenset(
    {
        # Terminators
        "return",
        "br",
        "cond_br",
        "unreachable",
        # Constants
        "integer_literal",
        "float_literal",
        "string_literal",
        "function_ptr",
        "enum_variant",
        # Calls and debug info
        "debug",
        "call",
        # Conversions
        "cast_int_to_ptr",
        "cast_ptr_to_int",
        "bitcast",
        "int_trunc",
        "int_zext",
        "int_sext",
        "float_trunc",
        "float_ext",
        # Memory
        "alloca",
        "load",
        "store",
        # Aggregates
        "struct_extract",
        "struct_create",
        "struct_destructure",
        # Pointer arithmetic
        "struct_field_ptr",
        "ptr_offset",
        "instruction_name",
    }
)

DECLARATIONS = frozenset(
    {"import", "gil", "enum", "func", "struct", "operator", "let", "var", "arg", "loc", "typealias"}
)

ROOT = (
    Mixin("whitespace"),
    Rule(r"%[A-Za-z0-9]+", Emit(TokenKind.NAME_VARIABLE)),
    MEMBER_ACCESS,
    NAMESPACE,
    SPECIAL_OPERATORS,
    PUNCTUATION,
    operators(r"\-/=+*%<>!&|^.~@$"),
    *STRINGS,
    *NUMBERS,
    DIRECTIVE_KEYWORD,
    Rule(ID, Classify(Classifier.IDENTIFIER)),
)

GIL = LanguageDefinition(
    name="gil",
    title="GIL",
    description="The Glu intermediate language (glu-lang.org)",
    states=common_states(ROOT),
    start_state="root",
    prelude=("bol",),
    keywords=KEYWORDS,
    declarations=DECLARATIONS,
)
