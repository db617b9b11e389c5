"""Language definition authoring surface.

A language is a mapping of state names to ordered rule lists. Each rule
pairs a regular expression with an action (what to emit) and an optional
transition (what to do to the state stack). ``Mixin`` entries splice
another state's rules in place; they are resolved once when the pattern
table is built.

Example:
    >>> LanguageDefinition(
    ...     name="tiny",
    ...     states={
    ...         "root": (
    ...             Rule(r"\\s+", Emit(TokenKind.TEXT)),
    ...             Rule(r"/\\*", Emit(TokenKind.COMMENT_MULTILINE), Push("comment")),
    ...             Rule(r"\\w+", Classify(Classifier.IDENTIFIER)),
    ...         ),
    ...         "comment": (
    ...             Rule(r"\\*/", Emit(TokenKind.COMMENT_MULTILINE), Pop()),
    ...             Rule(r"[^*]+|\\*", Emit(TokenKind.COMMENT_MULTILINE)),
    ...         ),
    ...     },
    ...     keywords={"if", "else"},
    ... )

Thread Safety:
All types here are frozen. Definitions are safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from glulex.lexer.classifiers import Classifier
    from glulex.tokens import TokenKind


# =============================================================================
# Actions
# =============================================================================


@dataclass(frozen=True, slots=True)
class Emit:
    """Emit the whole match as one token of ``kind``."""

    kind: TokenKind


@dataclass(frozen=True, slots=True, init=False)
class EmitGroups:
    """Emit one token per capture group, in group order.

    Text inside the match that no group covers is emitted as ``Text`` so
    that no source text is ever dropped. Empty and non-participating groups
    emit nothing.
    """

    kinds: tuple[TokenKind, ...]

    def __init__(self, *kinds: TokenKind) -> None:
        object.__setattr__(self, "kinds", tuple(kinds))


@dataclass(frozen=True, slots=True)
class Classify:
    """Defer the token kind to a classifier hook evaluated at match time."""

    strategy: Classifier


Action = Union[Emit, EmitGroups, Classify, None]


# =============================================================================
# Transitions
# =============================================================================


@dataclass(frozen=True, slots=True)
class Push:
    """Push ``state`` (or the current state again, when None)."""

    state: str | None = None


@dataclass(frozen=True, slots=True)
class Pop:
    """Pop ``depth`` states."""

    depth: int = 1


@dataclass(frozen=True, slots=True)
class Goto:
    """Replace the top of the stack with ``state``."""

    state: str


Transition = Union[Push, Pop, Goto, None]


# =============================================================================
# Rules and states
# =============================================================================


@dataclass(frozen=True, slots=True)
class Rule:
    """One (pattern, action, transition) entry of a state.

    Attributes:
        pattern: Regular expression, matched anchored at the scan position.
            Compiled with ``re.MULTILINE`` so ``^``/``$`` mean line boundaries.
        action: What to emit. None emits nothing for an empty match (and
            ``Text`` if the pattern consumed anything).
        transition: State stack directive applied after emitting.
        flags: Extra ``re`` flags, e.g. ``re.IGNORECASE``.
    """

    pattern: str
    action: Action = None
    transition: Transition = None
    flags: int = 0


@dataclass(frozen=True, slots=True)
class Mixin:
    """Include another state's rules at this point, by reference."""

    state: str


StateEntry = Union[Rule, Mixin]


def fallthrough(transition: Transition = None) -> Rule:
    """A zero-width rule that only changes state.

    With no argument it pops one state, which is how line-start and other
    transient states hand control back when nothing else matched.
    """
    return Rule("", None, Pop() if transition is None else transition)


# =============================================================================
# Language definition
# =============================================================================


@dataclass(frozen=True, eq=False)
class LanguageDefinition:
    """Immutable description of one language.

    Attributes:
        name: Canonical tag, e.g. "glu"
        states: State name -> ordered rules and mixins
        start_state: Bootstrap state at the bottom of the stack
        prelude: States pushed on top of ``start_state`` when a scan begins
        keywords: Identifiers classified as ``Keyword``
        declarations: Identifiers classified as ``Keyword.Declaration``
        constants: Identifiers classified as ``Keyword.Constant``
        control_flow: Keywords never treated as function calls
        aliases: Alternative lookup names
        title: Human-readable name
        description: One-line description

    Identity semantics: two definitions are equal only if they are the same
    object, which lets compiled pattern tables be cached per definition.
    """

    name: str
    states: Mapping[str, tuple[StateEntry, ...]]
    start_state: str = "root"
    prelude: tuple[str, ...] = ()
    keywords: frozenset[str] = field(default_factory=frozenset)
    declarations: frozenset[str] = field(default_factory=frozenset)
    constants: frozenset[str] = field(default_factory=frozenset)
    control_flow: frozenset[str] = field(default_factory=frozenset)
    aliases: tuple[str, ...] = ()
    title: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        frozen_states = {name: tuple(entries) for name, entries in self.states.items()}
        object.__setattr__(self, "states", MappingProxyType(frozen_states))
        object.__setattr__(self, "prelude", tuple(self.prelude))
        object.__setattr__(self, "aliases", tuple(self.aliases))
        for attr in ("keywords", "declarations", "constants", "control_flow"):
            object.__setattr__(self, attr, _frozen(getattr(self, attr)))


def _frozen(words: Iterable[str]) -> frozenset[str]:
    if isinstance(words, str):
        return frozenset(words.split())
    return frozenset(words)
