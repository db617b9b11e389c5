"""Pattern table: flattened, compiled rule lists per state.

A LanguageDefinition is authored with mixins; the scanner wants a flat,
ordered tuple of compiled rules per state. ``PatternTable.build`` resolves
every mixin recursively (splicing the included rules in at the mixin point,
preserving order), validates transitions, and compiles every pattern once.

All validation happens here, so a definition that builds is safe to scan
with: the scanner never meets an unknown state or a bad pattern.

Thread Safety:
PatternTable is immutable after creation. Safe to share.
The per-definition cache is guarded by a lock.

"""

from __future__ import annotations

import re
import threading
import weakref
from dataclasses import dataclass

from glulex.errors import DefinitionError
from glulex.lexer.rules import (
    Action,
    EmitGroups,
    Goto,
    LanguageDefinition,
    Mixin,
    Pop,
    Push,
    Rule,
    Transition,
)
from glulex.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CompiledRule:
    """A rule ready for scanning.

    Attributes:
        regex: Compiled pattern
        action: Emit, EmitGroups, Classify or None
        transition: Push, Pop, Goto or None
        origin: State in which the rule was declared (differs from the
            owning state when the rule arrived through a mixin)
        index: Position in the owning state's flattened list
    """

    regex: re.Pattern[str]
    action: Action
    transition: Transition
    origin: str
    index: int


class PatternTable:
    """Immutable mapping of state name -> flattened compiled rules.

    Use ``PatternTable.build`` (or the cached ``get_table``) to create.
    """

    __slots__ = ("_definition", "_states")

    def __init__(
        self,
        definition: LanguageDefinition,
        states: dict[str, tuple[CompiledRule, ...]],
    ) -> None:
        self._definition = definition
        self._states = states

    @property
    def definition(self) -> LanguageDefinition:
        return self._definition

    @property
    def names(self) -> frozenset[str]:
        """All state names."""
        return frozenset(self._states)

    def rules(self, state: str) -> tuple[CompiledRule, ...]:
        """Flattened rules for ``state``, in match order."""
        return self._states[state]

    def __contains__(self, state: str) -> bool:
        return state in self._states

    def __len__(self) -> int:
        return len(self._states)

    @classmethod
    def build(cls, definition: LanguageDefinition) -> PatternTable:
        """Resolve mixins, validate and compile a definition.

        Raises:
            DefinitionError: Unresolved or cyclic mixin, empty state table,
                missing start or prelude state, unknown transition target,
                uncompilable pattern, or group/kind count mismatch.
        """
        return _TableBuilder(definition).build()


class _TableBuilder:
    """One-shot helper holding the memo tables for a single build."""

    def __init__(self, definition: LanguageDefinition) -> None:
        self._definition = definition
        self._language = definition.name
        self._flat: dict[str, tuple[tuple[Rule, str], ...]] = {}
        self._compiled: dict[int, re.Pattern[str]] = {}

    def build(self) -> PatternTable:
        definition = self._definition
        if not definition.states:
            raise DefinitionError(self._language, "state table is empty")
        if definition.start_state not in definition.states:
            raise DefinitionError(
                self._language, f"start state '{definition.start_state}' is not defined"
            )
        for state in definition.prelude:
            if state not in definition.states:
                raise DefinitionError(self._language, f"prelude state '{state}' is not defined")

        states: dict[str, tuple[CompiledRule, ...]] = {}
        for name in definition.states:
            entries = self._flatten(name, ())
            if not entries:
                raise DefinitionError(self._language, "state has no rules", state=name)
            states[name] = tuple(
                self._compile(name, index, rule, origin)
                for index, (rule, origin) in enumerate(entries)
            )

        logger.debug(
            "Built pattern table for %s: %d states, %d rules",
            self._language,
            len(states),
            sum(len(rules) for rules in states.values()),
        )
        return PatternTable(definition, states)

    def _flatten(self, name: str, visiting: tuple[str, ...]) -> tuple[tuple[Rule, str], ...]:
        """Return (rule, origin state) pairs for ``name`` with mixins spliced in."""
        cached = self._flat.get(name)
        if cached is not None:
            return cached
        if name in visiting:
            chain = " -> ".join((*visiting, name))
            raise DefinitionError(self._language, f"mixin cycle: {chain}", state=name)

        entries = self._definition.states.get(name)
        if entries is None:
            raise DefinitionError(
                self._language, f"mixin references undefined state '{name}'", state=visiting[-1]
            )

        result: list[tuple[Rule, str]] = []
        for entry in entries:
            if isinstance(entry, Mixin):
                result.extend(self._flatten(entry.state, (*visiting, name)))
            elif isinstance(entry, Rule):
                result.append((entry, name))
            else:
                msg = f"expected Rule or Mixin, got {type(entry).__name__}"
                raise DefinitionError(self._language, msg, state=name)

        flat = tuple(result)
        self._flat[name] = flat
        return flat

    def _compile(self, owner: str, index: int, rule: Rule, origin: str) -> CompiledRule:
        regex = self._compiled.get(id(rule))
        if regex is None:
            try:
                regex = re.compile(rule.pattern, re.MULTILINE | rule.flags)
            except re.error as e:
                msg = f"invalid pattern {rule.pattern!r}: {e}"
                raise DefinitionError(self._language, msg, state=origin) from e
            self._check_rule(rule, regex, origin)
            self._compiled[id(rule)] = regex
        return CompiledRule(
            regex=regex,
            action=rule.action,
            transition=rule.transition,
            origin=origin,
            index=index,
        )

    def _check_rule(self, rule: Rule, regex: re.Pattern[str], origin: str) -> None:
        action = rule.action
        if isinstance(action, EmitGroups) and len(action.kinds) != regex.groups:
            msg = (
                f"pattern {rule.pattern!r} has {regex.groups} groups "
                f"but {len(action.kinds)} kinds"
            )
            raise DefinitionError(self._language, msg, state=origin)

        transition = rule.transition
        target: str | None = None
        if isinstance(transition, (Push, Goto)):
            target = transition.state
        elif isinstance(transition, Pop) and transition.depth < 1:
            msg = f"pop depth must be at least 1, got {transition.depth}"
            raise DefinitionError(self._language, msg, state=origin)
        if target is not None and target not in self._definition.states:
            msg = f"transition to undefined state '{target}'"
            raise DefinitionError(self._language, msg, state=origin)


# Cached tables, dropped together with their definition
_TABLES: weakref.WeakKeyDictionary[LanguageDefinition, PatternTable] = (
    weakref.WeakKeyDictionary()
)
_TABLES_LOCK = threading.Lock()


def get_table(definition: LanguageDefinition) -> PatternTable:
    """Get the pattern table for a definition (built once, then cached).

    Raises:
        DefinitionError: If the definition is malformed. Failures are not
            cached; each call re-raises.
    """
    table = _TABLES.get(definition)
    if table is not None:
        return table
    with _TABLES_LOCK:
        table = _TABLES.get(definition)
        if table is None:
            table = PatternTable.build(definition)
            _TABLES[definition] = table
    return table
