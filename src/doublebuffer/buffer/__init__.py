"""Double buffer container.

Architecture Note:
    buffer/ owns container-level state (the role flag and switch counter).
    Per-slot access rules live in core/ and are reused unchanged.
"""

from doublebuffer.buffer.double_buffer import DoubleBuffer

__all__ = [
    "DoubleBuffer",
]
