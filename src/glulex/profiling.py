"""ScanAccumulator — opt-in profiling for scans.

This module provides accumulated metrics while scanning:
- Total scan time
- Source length and token counts
- Error tokens and stack underflows
- Deepest state stack reached

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from glulex import tokenize
    from glulex.profiling import profiled_scan

    with profiled_scan() as metrics:
        list(tokenize('let x = "a\\(b)"', "glu"))

    print(metrics.summary())
    # {"total_ms": 0.3, "scans": 1, "source_length": 15, "token_count": 12, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics across scans.

    Attributes:
        start_time: Profiling start timestamp.
        scans: Number of completed scans recorded.
        source_length: Total characters scanned.
        token_count: Total tokens emitted.
        error_count: Tokens emitted for unmatched input.
        underflows: Scans that popped below the bootstrap state.
        max_depth: Deepest state stack seen in any scan.

    """

    start_time: float = field(default_factory=perf_counter)
    scans: int = 0
    source_length: int = 0
    token_count: int = 0
    error_count: int = 0
    underflows: int = 0
    max_depth: int = 0

    def record_scan(
        self,
        source_length: int,
        token_count: int,
        error_count: int,
        max_depth: int,
        underflowed: bool,
    ) -> None:
        """Record a finished scan."""
        self.scans += 1
        self.source_length += source_length
        self.token_count += token_count
        self.error_count += error_count
        self.max_depth = max(self.max_depth, max_depth)
        if underflowed:
            self.underflows += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "scans": self.scans,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "error_count": self.error_count,
            "underflows": self.underflows,
            "max_depth": self.max_depth,
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.
    Scans are recorded when their token stream is exhausted, so consume
    the iterator inside the block.

    Yields:
        ScanAccumulator that will be populated as scans finish.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
