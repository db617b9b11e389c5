"""
glulex — Syntax-highlighting lexers for GIL and Glu

A stateful, regex-rule scanner that turns GIL (the Glu intermediate
language) and Glu source into classified tokens. Tokenization is lossless:
the token values always concatenate back to the input.

Quick Start:
    >>> from glulex import tokenize
    >>> for token in tokenize('let s = "n=\\\\(n)"', "glu"):
    ...     print(token.kind.value, repr(token.value))
    Keyword.Declaration 'let'
    Text ' '
    Name 's'
    ...

Custom Languages:
    >>> from glulex import LanguageDefinition, Rule, Emit, TokenKind, Lexer
    >>> tiny = LanguageDefinition(
    ...     name="tiny",
    ...     states={"root": (Rule(r"\\w+", Emit(TokenKind.NAME)),)},
    ... )
    >>> [t.kind for t in Lexer("abc", tiny).tokenize()]
    [<TokenKind.NAME: 'Name'>]

Installation:
    pip install glulex              # Zero runtime dependencies
"""

from collections.abc import Iterator

from glulex.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from glulex.errors import (
    DefinitionError,
    GlulexError,
    StackUnderflowError,
    UnknownLanguageError,
)
from glulex.languages import (
    GIL,
    GLU,
    LanguageRegistry,
    LanguageRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
    get_language,
)
from glulex.lexer import (
    Classifier,
    Classify,
    Emit,
    EmitGroups,
    Goto,
    LanguageDefinition,
    Lexer,
    Mixin,
    PatternTable,
    Pop,
    Push,
    Rule,
    ScanStatus,
    StateStack,
    fallthrough,
    get_table,
)
from glulex.location import SourceLocation
from glulex.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from glulex.tokens import Token, TokenKind, coalesce

__version__ = "0.1.0"


def tokenize(
    source: str,
    language: str | LanguageDefinition = "glu",
    *,
    source_file: str | None = None,
) -> Iterator[Token]:
    """Tokenize source text.

    Args:
        source: Text to scan
        language: Registered tag/alias, or a LanguageDefinition
        source_file: Optional source file path for token locations

    Returns:
        Lazy iterator of tokens in source order

    Raises:
        UnknownLanguageError: If ``language`` is an unknown name
        DefinitionError: If a custom definition is malformed
    """
    definition = get_language(language) if isinstance(language, str) else language
    return Lexer(source, definition, source_file).tokenize()


__all__ = [
    # Main API
    "tokenize",
    "get_language",
    "coalesce",
    # Tokens
    "Token",
    "TokenKind",
    "SourceLocation",
    # Engine
    "Lexer",
    "ScanStatus",
    "StateStack",
    "PatternTable",
    "get_table",
    # Authoring surface
    "LanguageDefinition",
    "Rule",
    "Mixin",
    "Emit",
    "EmitGroups",
    "Classify",
    "Classifier",
    "Push",
    "Pop",
    "Goto",
    "fallthrough",
    # Languages
    "GIL",
    "GLU",
    "LanguageRegistry",
    "LanguageRegistryBuilder",
    "create_default_registry",
    "create_registry_with_defaults",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Profiling
    "ScanAccumulator",
    "get_scan_accumulator",
    "profiled_scan",
    # Errors
    "GlulexError",
    "DefinitionError",
    "UnknownLanguageError",
    "StackUnderflowError",
]
