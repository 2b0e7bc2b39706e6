"""doublebuffer: runtime borrow-checked double buffering for fixed-step simulations.

Usage:
    from doublebuffer import DoubleBuffer

    buffer = DoubleBuffer(0, 0)

    for _ in range(10):
        with buffer.current() as current, buffer.next_mut() as nxt:
            nxt.value = current.value + 1
        buffer.switch()

    with buffer.current() as current:
        assert current.value == 10
"""

__version__ = "0.1.0"

# Double buffer
from doublebuffer.buffer import DoubleBuffer

# Configuration
from doublebuffer.config import BufferSettings

# Core primitives
from doublebuffer.core import (
    BorrowCell,
    BorrowConflictError,
    BorrowError,
    BorrowMode,
    BorrowOrigin,
    BorrowReleasedError,
    BorrowState,
    FrameSite,
    Ref,
    RefMut,
    Role,
)

__all__ = [
    # Version
    "__version__",
    # Buffer
    "DoubleBuffer",
    "Role",
    # Core
    "BorrowCell",
    "Ref",
    "RefMut",
    "BorrowMode",
    "BorrowState",
    "BorrowOrigin",
    "FrameSite",
    # Errors
    "BorrowError",
    "BorrowConflictError",
    "BorrowReleasedError",
    # Config
    "BufferSettings",
]
