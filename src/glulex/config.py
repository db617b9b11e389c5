"""ContextVar-based scan configuration for glulex.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is read once when a Lexer is created, so a running scan is never
affected by later changes.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from glulex.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(coalesce=True)):
        tokens = list(tokenize(source, "glu"))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        coalesce: Merge adjacent tokens of identical kind into single runs
        strict_stack: Raise StackUnderflowError when a rule pops the
            bootstrap state, instead of degrading to a catch-all token
        max_depth: Upper bound on stored states; deeper pushes are only
            counted (and paid back by pops), with one warning per scan

    """

    coalesce: bool = False
    strict_stack: bool = False
    max_depth: int = 1024

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> ScanConfig.from_dict({"coalesce": True, "theme": "dark"}).coalesce
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (thread-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with scan_config_context(ScanConfig(strict_stack=True)):
        ...     tokens = list(tokenize(source, "gil"))

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
]
