"""Source location tracking for tokens.

Provides SourceLocation dataclass for tracking positions in source text.
Editors and formatters use it to map tokens back to lines and columns.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location of a token.

    All line and column positions are 1-indexed; offsets are 0-based
    indices into the scanned string.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source buffer
        end_offset: Absolute end offset in source buffer
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=2, col_offset=5, offset=12, end_offset=15)
            >>> str(loc)
            '2:5'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for diagnostics.

        Returns:
            Formatted string like "main.glu:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def length(self) -> int:
        """Number of source characters covered."""
        return self.end_offset - self.offset
