"""Shipped language definitions.

- gil: the Glu intermediate language
- glu: the Glu surface language

Both are plain data built on the authoring surface in ``glulex.lexer.rules``.
"""

from glulex.languages.gil import GIL
from glulex.languages.glu import GLU
from glulex.languages.registry import (
    LanguageRegistry,
    LanguageRegistryBuilder,
    create_default_registry,
    create_registry_with_defaults,
    get_language,
)

__all__ = [
    "GIL",
    "GLU",
    "LanguageRegistry",
    "LanguageRegistryBuilder",
    "create_default_registry",
    "create_registry_with_defaults",
    "get_language",
]
