"""Borrow errors raised by cells and double buffers."""

from __future__ import annotations

from doublebuffer.core.models import BorrowMode, BorrowOrigin, BorrowState, Role


class BorrowError(RuntimeError):
    """Base class for runtime borrow-rule violations."""

    pass


class BorrowConflictError(BorrowError):
    """Raised when an access conflicts with a live borrow on the same slot.

    Covers a shared or exclusive request against a cell that is already
    exclusively borrowed, an exclusive request against a cell with any live
    borrow, and a buffer switch while either slot is borrowed.

    Attributes:
        requested: Mode that was requested, or None for a switch.
        state: Access state of the cell at the time of the request.
        role: Role of the offending slot when raised by a DoubleBuffer.
        origins: Call sites of the live borrows, if origin tracking is on.
    """

    def __init__(
        self,
        requested: BorrowMode | None,
        state: BorrowState,
        role: Role | None = None,
        origins: tuple[BorrowOrigin, ...] = (),
    ):
        self.requested = requested
        self.state = state
        self.role = role
        self.origins = origins
        super().__init__(requested, state, role, origins)

    def __str__(self) -> str:
        return self._format()

    def _format(self) -> str:
        target = f"{self.role.name.lower()} slot" if self.role is not None else "cell"
        if self.requested is None:
            message = f"Cannot switch buffers: {target} is borrowed ({self.state})"
        else:
            message = (
                f"Cannot borrow {target} as {self.requested.name.lower()}: "
                f"already borrowed ({self.state})"
            )
        if self.origins:
            message += "".join(f"\n  {origin}" for origin in self.origins)
        return message


class BorrowReleasedError(BorrowError):
    """Raised when a borrow handle is used after it was released."""

    pass
