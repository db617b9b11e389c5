"""Tests for LanguageRegistry and LanguageRegistryBuilder."""

import pytest

from glulex import (
    GIL,
    GLU,
    Emit,
    LanguageDefinition,
    LanguageRegistryBuilder,
    Rule,
    TokenKind,
    UnknownLanguageError,
    create_default_registry,
    create_registry_with_defaults,
    get_language,
)


def _tiny(name: str, aliases: tuple[str, ...] = ()) -> LanguageDefinition:
    return LanguageDefinition(
        name=name,
        aliases=aliases,
        states={"root": (Rule(r".", Emit(TokenKind.TEXT)),)},
    )


class TestDefaultRegistry:
    def test_shipped_languages(self) -> None:
        registry = create_default_registry()
        assert registry.languages == (GIL, GLU)
        assert registry.names == frozenset({"gil", "glu"})

    def test_cached_singleton(self) -> None:
        assert create_default_registry() is create_default_registry()

    @pytest.mark.parametrize("name", ["glu", "Glu", "GLU"])
    def test_lookup_is_case_insensitive(self, name: str) -> None:
        assert get_language(name) is GLU

    def test_unknown_name(self) -> None:
        with pytest.raises(UnknownLanguageError) as exc_info:
            get_language("swift")
        assert exc_info.value.name == "swift"

    def test_contains(self) -> None:
        registry = create_default_registry()
        assert "gil" in registry
        assert "rust" not in registry
        assert len(registry) == 2


class TestBuilder:
    def test_register_and_build(self) -> None:
        tiny = _tiny("tiny", aliases=("tn", "Tiny2"))
        registry = LanguageRegistryBuilder().register(tiny).build()

        assert registry.get("tiny") is tiny
        assert registry.get("TN") is tiny
        assert registry.get("tiny2") is tiny

    def test_duplicate_name_rejected(self) -> None:
        builder = create_registry_with_defaults()
        with pytest.raises(ValueError, match="already registered by 'glu'"):
            builder.register(_tiny("GLU"))

    def test_duplicate_alias_rejected(self) -> None:
        builder = LanguageRegistryBuilder().register(_tiny("a", aliases=("x",)))
        with pytest.raises(ValueError, match="'x'"):
            builder.register(_tiny("b", aliases=("x",)))

    def test_built_registry_is_independent(self) -> None:
        builder = LanguageRegistryBuilder().register(_tiny("a"))
        registry = builder.build()
        builder.register(_tiny("b"))

        assert not registry.has("b")
        assert len(builder) == 2
        assert len(registry) == 1

    def test_defaults_plus_custom(self) -> None:
        registry = create_registry_with_defaults().register(_tiny("tiny")).build()
        assert [d.name for d in registry.languages] == ["gil", "glu", "tiny"]
