"""Token and TokenKind definitions for the glulex scanner.

The scanner produces a stream of Token objects that formatters consume.
Each Token has a kind, the exact source text it covers, and a source
location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.
Highlighters rarely need locations, so most tokens never allocate one.

"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from glulex.location import SourceLocation


class TokenKind(Enum):
    """Hierarchical token categories.

    Values are dotted paths; each kind's parent is the path with the last
    component removed (``Literal.Number.Hex`` -> ``Literal.Number``). The
    scanner treats kinds as opaque tags; the hierarchy is for consumers
    that style whole families at once.

    """

    TEXT = "Text"
    ERROR = "Error"

    COMMENT = "Comment"
    COMMENT_SINGLE = "Comment.Single"
    COMMENT_MULTILINE = "Comment.Multiline"
    COMMENT_PREPROC = "Comment.Preproc"

    KEYWORD = "Keyword"
    KEYWORD_CONSTANT = "Keyword.Constant"
    KEYWORD_DECLARATION = "Keyword.Declaration"

    NAME = "Name"
    NAME_CLASS = "Name.Class"
    NAME_CONSTANT = "Name.Constant"
    NAME_FUNCTION = "Name.Function"
    NAME_NAMESPACE = "Name.Namespace"
    NAME_VARIABLE = "Name.Variable"

    LITERAL = "Literal"
    STRING = "Literal.String"
    STRING_CHAR = "Literal.String.Char"
    STRING_ESCAPE = "Literal.String.Escape"
    NUMBER = "Literal.Number"
    NUMBER_BIN = "Literal.Number.Bin"
    NUMBER_FLOAT = "Literal.Number.Float"
    NUMBER_HEX = "Literal.Number.Hex"
    NUMBER_INTEGER = "Literal.Number.Integer"
    NUMBER_OCT = "Literal.Number.Oct"

    OPERATOR = "Operator"
    PUNCTUATION = "Punctuation"

    @property
    def parent(self) -> "TokenKind | None":
        """The enclosing category, or None for top-level kinds."""
        head, sep, _ = self.value.rpartition(".")
        if not sep:
            return None
        return TokenKind(head)

    def ancestors(self) -> Iterator["TokenKind"]:
        """Yield enclosing categories, nearest first."""
        kind = self.parent
        while kind is not None:
            yield kind
            kind = kind.parent

    def is_a(self, other: "TokenKind") -> bool:
        """True if this kind is ``other`` or one of its descendants."""
        return self is other or self.value.startswith(other.value + ".")


@dataclass(frozen=True, slots=True)
class Token:
    """A classified, contiguous span of source text.

    Attributes:
        kind: The token category
        value: The exact source text covered (never rewritten)
        _offset: Absolute start position in source
        _lineno: Start line number (1-indexed)
        _col: Start column (1-indexed)
        _source_file: Optional source file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy cache uses idempotent write (safe for concurrent access).

    """

    kind: TokenKind
    value: str
    _offset: int = 0
    _lineno: int = 1
    _col: int = 1
    _source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: "SourceLocation | None" = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> "SourceLocation":
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from glulex.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._offset,
            end_offset=self._offset + len(self.value),
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    @property
    def offset(self) -> int:
        """Start offset (convenience accessor)."""
        return self._offset

    @property
    def end_offset(self) -> int:
        """End offset, exclusive."""
        return self._offset + len(self.value)

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.kind.value}, {val!r}, {self._lineno}:{self._col})"


def coalesce(tokens: Iterable[Token]) -> Iterator[Token]:
    """Merge adjacent tokens of identical kind into runs.

    The merged token keeps the coordinates of the first token in the run.
    Losslessness is preserved: the concatenated values do not change.

    Example:
        >>> from glulex import tokenize
        >>> kinds = [t.kind for t in coalesce(tokenize("/* a /* b */ c */"))]
        >>> kinds
        [<TokenKind.COMMENT_MULTILINE: 'Comment.Multiline'>]
    """
    pending: Token | None = None
    parts: list[str] = []
    for token in tokens:
        if pending is not None and token.kind is pending.kind:
            parts.append(token.value)
            continue
        if pending is not None:
            yield _merged(pending, parts)
        pending = token
        parts = [token.value]
    if pending is not None:
        yield _merged(pending, parts)


def _merged(first: Token, parts: list[str]) -> Token:
    if len(parts) == 1:
        return first
    return Token(
        kind=first.kind,
        value="".join(parts),
        _offset=first._offset,
        _lineno=first._lineno,
        _col=first._col,
        _source_file=first._source_file,
    )
