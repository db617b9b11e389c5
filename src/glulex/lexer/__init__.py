"""Regex-rule scanner for glulex.

This package provides a state-stack lexer driven by declarative rule tables.
The engine knows nothing about any particular language; languages are data
(see ``glulex.languages``).

Architecture:
lexer/
├── __init__.py          # Re-exports
├── core.py              # Lexer class (scan loop, token emission)
├── modes.py             # ScanStatus enum
├── stack.py             # StateStack
├── table.py             # PatternTable (mixin flattening, compilation, cache)
├── classifiers.py       # Classifier hooks for identifier-like matches
└── rules.py             # Authoring surface: Rule, Mixin, actions, transitions

Usage:
    >>> from glulex.lexer import Lexer
    >>> from glulex.languages import GIL
    >>> for token in Lexer("%0 = load %x", GIL).tokenize():
    ...     print(token)
Token(Name.Variable, '%0', 1:1)
Token(Text, ' ', 1:3)
Token(Operator, '=', 1:4)
Token(Text, ' ', 1:5)
Token(Keyword, 'load', 1:6)
Token(Text, ' ', 1:10)
Token(Name.Variable, '%x', 1:11)

"""

from glulex.lexer.classifiers import Classifier
from glulex.lexer.core import Lexer
from glulex.lexer.modes import ScanStatus
from glulex.lexer.rules import (
    Classify,
    Emit,
    EmitGroups,
    Goto,
    LanguageDefinition,
    Mixin,
    Pop,
    Push,
    Rule,
    fallthrough,
)
from glulex.lexer.stack import StateStack
from glulex.lexer.table import PatternTable, get_table

__all__ = [
    "Classifier",
    "Classify",
    "Emit",
    "EmitGroups",
    "Goto",
    "LanguageDefinition",
    "Lexer",
    "Mixin",
    "PatternTable",
    "Pop",
    "Push",
    "Rule",
    "ScanStatus",
    "StateStack",
    "fallthrough",
    "get_table",
]
