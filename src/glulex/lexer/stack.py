"""State stack for the scanner.

The top of the stack selects which rules are active. Nested constructs
(block comments, interpolation parentheses) push the same state once per
level, so nesting depth is simply stack depth.

Thread Safety:
StateStack instances belong to exactly one scan. Not shared.

"""

from __future__ import annotations


class StateStack:
    """Ordered, mutable stack of active state names.

    The bottom element is the bootstrap state and is never removed. A pop
    that would remove it is refused: the stack is left unchanged and
    ``underflowed`` is set so the scanner can degrade gracefully.

    Usage:
            >>> stack = StateStack("root")
            >>> stack.push("comment")
            True
            >>> stack.current()
            'comment'
            >>> stack.pop()
            True
            >>> stack.pop()
            False
            >>> stack.underflowed
            True

    """

    __slots__ = ("_states", "_max_depth", "overflow", "max_seen", "underflowed")

    def __init__(self, bootstrap: str, max_depth: int = 1024) -> None:
        self._states: list[str] = [bootstrap]
        self._max_depth = max(1, max_depth)
        self.overflow = 0  # Pushes beyond max_depth, still owed a pop
        self.max_seen = 1
        self.underflowed = False

    def current(self) -> str:
        """Return the active state."""
        return self._states[-1]

    @property
    def bootstrap(self) -> str:
        """Return the bottom state."""
        return self._states[0]

    @property
    def depth(self) -> int:
        """Number of states on the stack (at least 1)."""
        return len(self._states)

    def push(self, state: str) -> bool:
        """Push a state.

        At the depth limit the state is not stored; the push is counted in
        ``overflow`` and the top state stays active until a pop pays it
        back, so pushes and pops stay balanced.

        Returns:
            False if the stack is already at its depth limit (nothing stored).
        """
        if len(self._states) >= self._max_depth:
            self.overflow += 1
            return False
        self._states.append(state)
        if len(self._states) > self.max_seen:
            self.max_seen = len(self._states)
        return True

    def pop(self, depth: int = 1) -> bool:
        """Pop ``depth`` states.

        Overflowed pushes are popped first, without touching the stored
        states.

        Returns:
            False (and sets ``underflowed``) if that would remove the
            bootstrap state; the stack is not modified in that case.
        """
        from_overflow = min(self.overflow, depth)
        remaining = depth - from_overflow
        if remaining >= len(self._states):
            self.underflowed = True
            return False
        self.overflow -= from_overflow
        if remaining:
            del self._states[-remaining:]
        return True

    def goto(self, state: str) -> None:
        """Replace the active state without changing depth."""
        self._states[-1] = state

    def snapshot(self) -> tuple[str, ...]:
        """Immutable copy of the stack, bottom first."""
        return tuple(self._states)

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"StateStack({' > '.join(self._states)})"
