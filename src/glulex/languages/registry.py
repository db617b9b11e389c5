"""Language registry for lookup by tag or alias.

Maps names to LanguageDefinitions. Selecting a language from a file name
or editor mode is left to the caller; the registry only resolves names.

Thread Safety:
LanguageRegistry is immutable after creation. Safe to share.
Use LanguageRegistryBuilder for mutable construction.

Example:
    >>> builder = LanguageRegistryBuilder()
    >>> builder.register(GLU)
    >>> registry = builder.build()
    >>> registry.get("Glu") is GLU
    True
"""

from __future__ import annotations

from glulex.errors import UnknownLanguageError
from glulex.lexer.rules import LanguageDefinition


class LanguageRegistry:
    """Immutable registry of language definitions.

    Names are matched case-insensitively.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_languages", "_by_name")

    def __init__(
        self,
        languages: tuple[LanguageDefinition, ...],
        by_name: dict[str, LanguageDefinition],
    ) -> None:
        """Initialize registry with pre-built mappings.

        Use LanguageRegistryBuilder to create instances.
        """
        self._languages = languages
        self._by_name = by_name

    def get(self, name: str) -> LanguageDefinition:
        """Get the definition registered under a tag or alias.

        Raises:
            UnknownLanguageError: If nothing is registered under ``name``
        """
        definition = self._by_name.get(name.lower())
        if definition is None:
            raise UnknownLanguageError(name)
        return definition

    def has(self, name: str) -> bool:
        """Check if a tag or alias is registered."""
        return name.lower() in self._by_name

    @property
    def names(self) -> frozenset[str]:
        """All registered tags and aliases."""
        return frozenset(self._by_name.keys())

    @property
    def languages(self) -> tuple[LanguageDefinition, ...]:
        """All registered definitions, in registration order."""
        return self._languages

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        """Number of registered definitions."""
        return len(self._languages)


class LanguageRegistryBuilder:
    """Mutable builder for LanguageRegistry."""

    __slots__ = ("_languages", "_by_name")

    def __init__(self) -> None:
        self._languages: list[LanguageDefinition] = []
        self._by_name: dict[str, LanguageDefinition] = {}

    def register(self, definition: LanguageDefinition) -> LanguageRegistryBuilder:
        """Register a definition under its name and aliases.

        Returns:
            Self for chaining

        Raises:
            ValueError: If a name or alias is already taken
        """
        for name in (definition.name, *definition.aliases):
            key = name.lower()
            if key in self._by_name:
                existing = self._by_name[key]
                msg = f"Language name '{name}' already registered by '{existing.name}'"
                raise ValueError(msg)
            self._by_name[key] = definition

        self._languages.append(definition)
        return self

    def build(self) -> LanguageRegistry:
        """Build immutable registry from registered definitions."""
        return LanguageRegistry(
            languages=tuple(self._languages),
            by_name=dict(self._by_name),
        )

    def __len__(self) -> int:
        return len(self._languages)


def create_registry_with_defaults() -> LanguageRegistryBuilder:
    """Create a builder pre-populated with GIL and Glu.

    Use this to add custom languages next to the shipped ones.
    """
    from glulex.languages.gil import GIL
    from glulex.languages.glu import GLU

    builder = LanguageRegistryBuilder()
    builder.register(GIL)
    builder.register(GLU)
    return builder


# Cached singleton — thread-safe since LanguageRegistry is immutable
_DEFAULT_REGISTRY: LanguageRegistry | None = None


def create_default_registry() -> LanguageRegistry:
    """Get the default language registry (cached singleton)."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = create_registry_with_defaults().build()
    return _DEFAULT_REGISTRY


def get_language(name: str) -> LanguageDefinition:
    """Look a language up in the default registry.

    Raises:
        UnknownLanguageError: If ``name`` is not a known tag or alias
    """
    return create_default_registry().get(name)
