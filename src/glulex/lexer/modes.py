"""Scanner execution status.

Not to be confused with lexer states (the named rule sets on the state
stack): this is whether the scan itself still has input to consume.
"""

from __future__ import annotations

from enum import Enum, auto


class ScanStatus(Enum):
    """Scanner execution status.

    - RUNNING: Cursor is before the end of input
    - EXHAUSTED: All input consumed; terminal

    """

    RUNNING = auto()
    EXHAUSTED = auto()
