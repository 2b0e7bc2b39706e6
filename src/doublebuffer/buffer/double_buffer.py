"""Double buffer: a current/next pair of borrow cells with O(1) role switching.

Usage:
    buffer = DoubleBuffer([2, 4, 6], [])

    with buffer.current() as current, buffer.next_mut() as nxt:
        for number in current.value:
            nxt.value.append(number + 1)

    buffer.switch()

    with buffer.current() as current:
        assert current.value == [3, 5, 7]

Each step reads the state produced by the previous step from ``current`` while
writing the state for the following step into ``next``. The two slots are
distinct cells, so a borrow of one never conflicts with a borrow of the other.

Gotcha: ``switch()`` fails while any borrow of either slot is live. Close the
``with`` blocks before switching.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from doublebuffer.config import BufferSettings
from doublebuffer.core.cell import BorrowCell, Ref, RefMut
from doublebuffer.core.errors import BorrowConflictError
from doublebuffer.core.models import BorrowMode, BorrowState, Role

T = TypeVar("T")

_LOG = logging.getLogger("doublebuffer.buffer")


class DoubleBuffer(Generic[T]):
    """Two independently borrow-checked slots labeled current and next.

    Switching flips a flag; the stored values are never copied or moved.

    Args:
        current_value: Initial value of the current slot.
        next_value: Initial value of the next slot.
        settings: Diagnostics settings. Loaded from the environment if omitted.
    """

    def __init__(self, current_value: T, next_value: T, *, settings: BufferSettings | None = None):
        """Initialize the buffer with the first value as current.

        Args:
            current_value: Initial value of the current slot.
            next_value: Initial value of the next slot.
            settings: Diagnostics settings. Loaded from the environment if omitted.
        """
        if settings is None:
            settings = BufferSettings()
        self._settings = settings
        self._first: BorrowCell[T] = BorrowCell(
            current_value,
            track_origins=settings.track_origins,
            origin_depth=settings.origin_depth,
        )
        self._second: BorrowCell[T] = BorrowCell(
            next_value,
            track_origins=settings.track_origins,
            origin_depth=settings.origin_depth,
        )
        self._switched = False
        self._generation = 0

    @property
    def settings(self) -> BufferSettings:
        return self._settings

    @property
    def is_switched(self) -> bool:
        """True when the second slot is current, i.e. after an odd number of switches."""
        return self._switched

    @property
    def generation(self) -> int:
        """Number of successful switches since construction."""
        return self._generation

    def _cell(self, role: Role) -> BorrowCell[T]:
        if (role is Role.CURRENT) != self._switched:
            return self._first
        return self._second

    def slot(self, role: Role, *, stacklevel: int = 1) -> Ref[T]:
        """Acquire a shared borrow of the slot holding ``role``.

        Args:
            role: Which slot to borrow.
            stacklevel: Frames above the caller to attribute the borrow to.

        Returns:
            Shared handle, live until released.

        Raises:
            BorrowConflictError: If that slot is exclusively borrowed.
        """
        cell = self._cell(role)
        return Ref(cell, cell._acquire(BorrowMode.SHARED, stacklevel + 1, role=role))

    def slot_mut(self, role: Role, *, stacklevel: int = 1) -> RefMut[T]:
        """Acquire an exclusive borrow of the slot holding ``role``.

        Args:
            role: Which slot to borrow.
            stacklevel: Frames above the caller to attribute the borrow to.

        Returns:
            Exclusive handle, live until released.

        Raises:
            BorrowConflictError: If that slot has any live borrow.
        """
        cell = self._cell(role)
        return RefMut(cell, cell._acquire(BorrowMode.EXCLUSIVE, stacklevel + 1, role=role))

    def current(self) -> Ref[T]:
        """Shared borrow of the current slot."""
        return self.slot(Role.CURRENT, stacklevel=2)

    def current_mut(self) -> RefMut[T]:
        """Exclusive borrow of the current slot."""
        return self.slot_mut(Role.CURRENT, stacklevel=2)

    def next(self) -> Ref[T]:
        """Shared borrow of the next slot."""
        return self.slot(Role.NEXT, stacklevel=2)

    def next_mut(self) -> RefMut[T]:
        """Exclusive borrow of the next slot."""
        return self.slot_mut(Role.NEXT, stacklevel=2)

    def state(self, role: Role) -> BorrowState:
        """Access state of the slot holding ``role``."""
        return self._cell(role).state

    def current_state(self) -> BorrowState:
        return self.state(Role.CURRENT)

    def next_state(self) -> BorrowState:
        return self.state(Role.NEXT)

    def switch(self) -> None:
        """Swap the current and next roles.

        Both slots must be free. On failure nothing changes: roles and
        generation stay as they were.

        Raises:
            BorrowConflictError: If either slot has a live borrow.
        """
        for role in (Role.CURRENT, Role.NEXT):
            cell = self._cell(role)
            state = cell.state
            if not state.is_free:
                _LOG.debug("Switch refused: %s slot is %s", role.name.lower(), state)
                raise BorrowConflictError(None, state, role=role, origins=cell.origins)

        self._switched = not self._switched
        self._generation += 1
        _LOG.debug("Switched buffers: generation=%d switched=%s", self._generation, self._switched)

    def __repr__(self) -> str:
        return (
            f"DoubleBuffer(generation={self._generation}, "
            f"current={self.current_state()}, next={self.next_state()})"
        )
