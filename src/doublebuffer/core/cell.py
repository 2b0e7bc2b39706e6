"""Runtime-checked mutable cell with scoped borrow handles.

Usage:
    cell = BorrowCell([1, 2, 3])

    with cell.borrow() as view:          # shared: any number at once
        total = sum(view.value)

    with cell.borrow_mut() as slot:      # exclusive: nothing else alongside
        slot.value.append(4)
        slot.value = [0]                 # replace the stored value

Borrows are acquired when ``borrow()``/``borrow_mut()`` is called, not when the
``with`` block is entered, and released when the block exits.

Gotcha: a handle used outside a ``with`` block is released by ``release()`` or,
failing that, when it is garbage collected. Hold handles in ``with`` blocks
whenever a later borrow or switch depends on the release.
"""

from __future__ import annotations

import logging
import sys
import traceback
from itertools import count
from types import TracebackType
from typing import Generic, TypeVar

from doublebuffer.core.errors import BorrowConflictError, BorrowReleasedError
from doublebuffer.core.models import BorrowMode, BorrowOrigin, BorrowState, FrameSite, Role

T = TypeVar("T")

_LOG = logging.getLogger("doublebuffer.cell")


class _BorrowHandle(Generic[T]):
    """Scoped access to a cell's value. Released on scope exit."""

    mode: BorrowMode

    def __init__(self, cell: BorrowCell[T], token: int):
        self._cell = cell
        self._token = token
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Give the borrow back to the cell. Safe to call more than once."""
        if self._released:
            return
        self._released = True
        self._cell._release(self.mode, self._token)

    def _get(self) -> T:
        if self._released:
            raise BorrowReleasedError(f"{type(self).__name__} used after release")
        return self._cell._value

    def __enter__(self) -> _BorrowHandle[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __del__(self) -> None:
        # Fallback for handles that never entered a with block
        if not getattr(self, "_released", True):
            self.release()

    def __repr__(self) -> str:
        status = "released" if self._released else "live"
        return f"{type(self).__name__}({status})"


class Ref(_BorrowHandle[T]):
    """Shared borrow of a cell. Read-only view of the value."""

    mode = BorrowMode.SHARED

    def __enter__(self) -> Ref[T]:
        return self

    @property
    def value(self) -> T:
        """The borrowed value.

        Raises:
            BorrowReleasedError: If the borrow has been released.
        """
        return self._get()


class RefMut(_BorrowHandle[T]):
    """Exclusive borrow of a cell. Value may be mutated in place or replaced."""

    mode = BorrowMode.EXCLUSIVE

    def __enter__(self) -> RefMut[T]:
        return self

    @property
    def value(self) -> T:
        """The borrowed value. Assigning replaces the value stored in the cell.

        Raises:
            BorrowReleasedError: If the borrow has been released.
        """
        return self._get()

    @value.setter
    def value(self, new_value: T) -> None:
        if self._released:
            raise BorrowReleasedError("RefMut used after release")
        self._cell._value = new_value


class BorrowCell(Generic[T]):
    """Mutable slot enforcing shared/exclusive access at runtime.

    At any instant the cell has either any number of live shared borrows
    or a single live exclusive borrow. Conflicting requests fail immediately
    with BorrowConflictError; nothing blocks or waits.

    Args:
        value: Initial value held by the cell.
        track_origins: Record the call site of every live borrow and report
            them in conflict errors.
        origin_depth: Stack frames to record per borrow when tracking.
    """

    def __init__(self, value: T, *, track_origins: bool = False, origin_depth: int = 1):
        self._value = value
        self._readers = 0
        self._writer = False
        self._tokens = count()
        self._track_origins = track_origins
        self._origin_depth = origin_depth
        self._origins: dict[int, BorrowOrigin] = {}

    @property
    def state(self) -> BorrowState:
        """Current access state of the cell."""
        return BorrowState(readers=self._readers, writer=self._writer)

    @property
    def origins(self) -> tuple[BorrowOrigin, ...]:
        """Call sites of live borrows (empty unless origin tracking is on)."""
        return tuple(self._origins.values())

    def borrow(self, *, stacklevel: int = 1) -> Ref[T]:
        """Acquire a shared borrow.

        Args:
            stacklevel: Frames above the caller to attribute the borrow to,
                as in ``warnings.warn``. Only used when tracking origins.

        Returns:
            Shared handle, live until released.

        Raises:
            BorrowConflictError: If the cell is exclusively borrowed.
        """
        return Ref(self, self._acquire(BorrowMode.SHARED, stacklevel + 1))

    def borrow_mut(self, *, stacklevel: int = 1) -> RefMut[T]:
        """Acquire an exclusive borrow.

        Args:
            stacklevel: Frames above the caller to attribute the borrow to.

        Returns:
            Exclusive handle, live until released.

        Raises:
            BorrowConflictError: If the cell has any live borrow.
        """
        return RefMut(self, self._acquire(BorrowMode.EXCLUSIVE, stacklevel + 1))

    def try_borrow(self) -> Ref[T] | None:
        """Acquire a shared borrow, or return None if it would conflict."""
        if not self.state.admits(BorrowMode.SHARED):
            return None
        return Ref(self, self._acquire(BorrowMode.SHARED, 2))

    def try_borrow_mut(self) -> RefMut[T] | None:
        """Acquire an exclusive borrow, or return None if it would conflict."""
        if not self.state.admits(BorrowMode.EXCLUSIVE):
            return None
        return RefMut(self, self._acquire(BorrowMode.EXCLUSIVE, 2))

    def replace(self, value: T) -> T:
        """Store a new value and return the old one. Requires the cell to be free.

        Raises:
            BorrowConflictError: If the cell has any live borrow.
        """
        with RefMut(self, self._acquire(BorrowMode.EXCLUSIVE, 2)) as slot:
            old = slot.value
            slot.value = value
        return old

    def _acquire(
        self,
        mode: BorrowMode,
        stacklevel: int,
        role: Role | None = None,
    ) -> int:
        """Record a new borrow of `mode` and return its token."""
        state = self.state
        if not state.admits(mode):
            _LOG.debug("Borrow conflict: requested %s, cell is %s", mode.name, state)
            raise BorrowConflictError(mode, state, role=role, origins=self.origins)

        origin = BorrowOrigin(mode, self._capture(stacklevel + 1)) if self._track_origins else None

        if mode is BorrowMode.EXCLUSIVE:
            self._writer = True
        else:
            self._readers += 1

        token = next(self._tokens)
        if origin is not None:
            self._origins[token] = origin
        return token

    def _capture(self, stacklevel: int) -> tuple[FrameSite, ...]:
        # Clamped to the outermost frame, as warnings.warn does
        frame = sys._getframe()
        for _ in range(stacklevel):
            if frame.f_back is None:
                break
            frame = frame.f_back
        return tuple(
            FrameSite(summary.filename, summary.lineno, summary.name)
            for summary in traceback.extract_stack(frame, limit=self._origin_depth)
        )

    def _release(self, mode: BorrowMode, token: int) -> None:
        if mode is BorrowMode.EXCLUSIVE:
            self._writer = False
        else:
            self._readers -= 1
        self._origins.pop(token, None)

    def __repr__(self) -> str:
        return f"BorrowCell({self.state})"
