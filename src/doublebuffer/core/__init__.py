"""Core borrow primitives: cell, handles, states, and errors.

Architecture Note:
    core/ has no knowledge of double buffering. BorrowCell is a standalone
    runtime-checked slot; buffer/ composes two of them.
"""

from doublebuffer.core.cell import BorrowCell, Ref, RefMut
from doublebuffer.core.errors import BorrowConflictError, BorrowError, BorrowReleasedError
from doublebuffer.core.models import BorrowMode, BorrowOrigin, BorrowState, FrameSite, Role

__all__ = [
    # Cell
    "BorrowCell",
    "Ref",
    "RefMut",
    # Models
    "BorrowMode",
    "BorrowState",
    "BorrowOrigin",
    "FrameSite",
    "Role",
    # Errors
    "BorrowError",
    "BorrowConflictError",
    "BorrowReleasedError",
]
