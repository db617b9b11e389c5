"""Regex-rule scanner over a stack of lexer states.

Each step tries the active state's flattened rules anchored at the cursor,
in declaration order; the first match wins. The matched rule emits tokens
and may push, pop or replace states. Input that no rule matches is emitted
one code point at a time as ``Error`` tokens, so the scan always finishes.

Guarantees:
- Lossless: concatenated token values reproduce the source exactly.
- Forward progress: a zero-width match is accepted at most once per
  (offset, state, rule), so state-only rules cannot loop.
- Single pass: no backtracking over emitted tokens.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; the pattern table is shared and immutable.

"""

from __future__ import annotations

import re
from collections.abc import Iterator

from glulex.config import ScanConfig, get_scan_config
from glulex.errors import StackUnderflowError
from glulex.lexer.classifiers import classify
from glulex.lexer.modes import ScanStatus
from glulex.lexer.rules import (
    Classify,
    Emit,
    EmitGroups,
    Goto,
    LanguageDefinition,
    Pop,
    Push,
)
from glulex.lexer.stack import StateStack
from glulex.lexer.table import CompiledRule, PatternTable, get_table
from glulex.profiling import get_scan_accumulator
from glulex.tokens import Token, TokenKind, coalesce
from glulex.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer:
    """Stateful scanner for one source string.

    Usage:
            >>> from glulex.languages import get_language
            >>> lexer = Lexer("let x = 0x1F", get_language("glu"))
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(Keyword.Declaration, 'let', 1:1)
        Token(Text, ' ', 1:4)
        Token(Name, 'x', 1:5)
        Token(Text, ' ', 1:6)
        Token(Operator, '=', 1:7)
        Token(Text, ' ', 1:8)
        Token(Literal.Number.Hex, '0x1F', 1:9)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_pos",
        "_lineno",
        "_col",
        "_source_file",
        "_definition",
        "_table",
        "_stack",
        "_status",
        "_config",
        "_zero_width_seen",  # (offset, state, rule index) for empty matches at _pos
        "_depth_warned",  # Stack limit warning already logged
        "_token_count",
        "_error_count",
    )

    def __init__(
        self,
        source: str,
        definition: LanguageDefinition,
        source_file: str | None = None,
        *,
        config: ScanConfig | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Text to scan
            definition: Language to scan it as
            source_file: Optional source file path, carried into token locations
            config: Scan options; defaults to the active context config

        Raises:
            DefinitionError: If the definition cannot be built into a table.
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._source_file = source_file
        self._definition = definition
        self._table: PatternTable = get_table(definition)
        self._config = config if config is not None else get_scan_config()
        self._status = ScanStatus.RUNNING

        self._stack = StateStack(definition.start_state, self._config.max_depth)
        for state in definition.prelude:
            self._stack.push(state)

        self._zero_width_seen: set[tuple[int, str, int]] = set()
        self._depth_warned = False
        self._token_count = 0
        self._error_count = 0

    @property
    def status(self) -> ScanStatus:
        return self._status

    @property
    def stack(self) -> tuple[str, ...]:
        """Current state stack, bottom first."""
        return self._stack.snapshot()

    @property
    def position(self) -> int:
        return self._pos

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            Token objects one at a time, in source order.

        Complexity: O(n * r) where r is the largest rule count of a state
        Memory: O(depth) for the state stack; tokens are yielded, not kept
        """
        tokens = self._scan()
        if self._config.coalesce:
            tokens = coalesce(tokens)
        yield from tokens

    def _scan(self) -> Iterator[Token]:
        source_len = self._source_len
        while self._pos < source_len:
            if self._stack.underflowed:
                # Degrade: the rest of the input becomes one catch-all token
                yield self._emit(TokenKind.TEXT, self._source[self._pos :])
                break
            yield from self._step()

        if self._status is ScanStatus.RUNNING:
            self._status = ScanStatus.EXHAUSTED
            self._record_profile()

    def _step(self) -> Iterator[Token]:
        """Advance by one rule application (or one error code point)."""
        state = self._stack.current()
        pos = self._pos
        for rule in self._table.rules(state):
            match = rule.regex.match(self._source, pos)
            if match is None:
                continue
            if match.end() == pos:
                key = (pos, state, rule.index)
                if key in self._zero_width_seen:
                    continue
                self._zero_width_seen.add(key)
            yield from self._apply(rule, match, state)
            return

        self._error_count += 1
        yield self._emit(TokenKind.ERROR, self._source[pos])

    # =========================================================================
    # Rule application
    # =========================================================================

    def _apply(self, rule: CompiledRule, match: re.Match[str], state: str) -> Iterator[Token]:
        action = rule.action
        text = match.group()

        if isinstance(action, Emit):
            if text:
                yield self._emit(action.kind, text)
        elif isinstance(action, EmitGroups):
            yield from self._emit_groups(action, match)
        elif isinstance(action, Classify):
            if text:
                kind = classify(
                    action.strategy, text, self._source, match.end(), self._definition
                )
                yield self._emit(kind, text)
        elif text:
            yield self._emit(TokenKind.TEXT, text)

        if rule.transition is not None:
            self._transition(rule, state, match.start())

    def _emit_groups(self, action: EmitGroups, match: re.Match[str]) -> Iterator[Token]:
        """One token per group; uncovered text inside the match becomes Text."""
        source = self._source
        cursor = match.start()
        for index, kind in enumerate(action.kinds, start=1):
            start, end = match.span(index)
            if start < 0 or end <= cursor:
                continue
            start = max(start, cursor)
            if start > cursor:
                yield self._emit(TokenKind.TEXT, source[cursor:start])
            if end > start:
                yield self._emit(kind, source[start:end])
            cursor = end
        if cursor < match.end():
            yield self._emit(TokenKind.TEXT, source[cursor : match.end()])

    def _transition(self, rule: CompiledRule, state: str, offset: int) -> None:
        transition = rule.transition
        stack = self._stack
        if isinstance(transition, Push):
            target = transition.state if transition.state is not None else state
            if not stack.push(target) and not self._depth_warned:
                self._depth_warned = True
                logger.warning(
                    "State stack limit %d reached at offset %d; "
                    "deeper nesting keeps state '%s' active",
                    self._config.max_depth,
                    offset,
                    stack.current(),
                )
        elif isinstance(transition, Pop):
            if not stack.pop(transition.depth):
                if self._config.strict_stack:
                    raise StackUnderflowError(stack.bootstrap, offset)
                logger.warning(
                    "%s: rule from state '%s' popped below '%s' at offset %d; "
                    "emitting remaining input as text",
                    self._definition.name,
                    rule.origin,
                    stack.bootstrap,
                    offset,
                )
        elif isinstance(transition, Goto):
            stack.goto(transition.state)

    # =========================================================================
    # Token creation and position tracking
    # =========================================================================

    def _emit(self, kind: TokenKind, text: str) -> Token:
        """Create a token at the cursor and advance past ``text``."""
        token = Token(
            kind=kind,
            value=text,
            _offset=self._pos,
            _lineno=self._lineno,
            _col=self._col,
            _source_file=self._source_file,
        )
        self._advance(text)
        self._token_count += 1
        return token

    def _advance(self, text: str) -> None:
        newline_count = text.count("\n")
        if newline_count > 0:
            self._lineno += newline_count
            self._col = len(text) - text.rfind("\n")
        else:
            self._col += len(text)
        self._pos += len(text)
        self._zero_width_seen.clear()

    def _record_profile(self) -> None:
        accumulator = get_scan_accumulator()
        if accumulator is None:
            return
        accumulator.record_scan(
            source_length=self._source_len,
            token_count=self._token_count,
            error_count=self._error_count,
            max_depth=self._stack.max_seen,
            underflowed=self._stack.underflowed,
        )
