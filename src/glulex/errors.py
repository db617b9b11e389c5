"""Exception classes for glulex.

Only malformed language definitions (and, in strict mode, lexer bugs) raise.
Malformed source text never does: the scanner recovers locally.
"""

from __future__ import annotations


class GlulexError(Exception):
    """Base exception for all glulex errors.

    Subclass this for specific error categories.
    """

    pass


class DefinitionError(GlulexError):
    """Error in a language definition.

    Raised at load time, before any scan begins, when a definition cannot be
    turned into a pattern table: unresolved or cyclic mixins, empty state
    tables, a missing start state, unknown transition targets or patterns
    that do not compile. Fatal to that definition only.
    """

    def __init__(
        self,
        language: str,
        message: str,
        state: str | None = None,
    ) -> None:
        """Initialize definition error.

        Args:
            language: Name of the offending language definition
            message: Description of the problem
            state: State in which the problem was found (optional)
        """
        self.language = language
        self.message = message
        self.state = state

        location = f" (state '{state}')" if state else ""
        super().__init__(f"Language '{language}'{location}: {message}")


class UnknownLanguageError(GlulexError, LookupError):
    """No language is registered under the requested tag or alias."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown language: {name!r}")


class StackUnderflowError(GlulexError):
    """A rule tried to pop the bootstrap state.

    Only raised when ``ScanConfig.strict_stack`` is enabled. By default the
    scanner logs the underflow and degrades instead.
    """

    def __init__(self, state: str, offset: int) -> None:
        """Initialize underflow error.

        Args:
            state: The bootstrap state that would have been popped
            offset: Source offset of the offending match
        """
        self.state = state
        self.offset = offset
        super().__init__(f"Cannot pop bootstrap state '{state}' at offset {offset}")
