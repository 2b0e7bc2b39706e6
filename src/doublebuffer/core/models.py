"""Borrow models: access modes, cell states, slot roles, and borrow origins."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class BorrowMode(Enum):
    """Kind of access a borrow handle holds on a cell."""

    SHARED = auto()  # Any number at once, no exclusive borrow alongside
    EXCLUSIVE = auto()  # At most one, nothing else alongside


class Role(Enum):
    """Logical label of a slot in a DoubleBuffer."""

    CURRENT = auto()
    """Stable state produced by the previous step. Read during this step."""

    NEXT = auto()
    """State being prepared for the following step. Written during this step."""


@dataclass(frozen=True, slots=True)
class BorrowState:
    """Snapshot of a cell's access state.

    A cell is free (no borrows), shared (``readers`` live shared borrows),
    or exclusive (one live exclusive borrow). Never both.

    Attributes:
        readers: Number of live shared borrows.
        writer: Whether a live exclusive borrow exists.
    """

    readers: int = 0
    writer: bool = False

    def __post_init__(self) -> None:
        if self.readers < 0:
            raise ValueError(f"readers must be non-negative, got {self.readers}")
        if self.writer and self.readers:
            raise ValueError("exclusive borrow cannot coexist with shared borrows")

    @property
    def is_free(self) -> bool:
        return not self.writer and self.readers == 0

    @property
    def is_shared(self) -> bool:
        return self.readers > 0

    @property
    def is_exclusive(self) -> bool:
        return self.writer

    def admits(self, mode: BorrowMode) -> bool:
        """Check whether a new borrow of ``mode`` can be granted in this state.

        Args:
            mode: Requested access mode.

        Returns:
            True if the request does not conflict with the live borrows.
        """
        if mode is BorrowMode.SHARED:
            return not self.writer
        return self.is_free

    def __str__(self) -> str:
        if self.writer:
            return "exclusive"
        if self.readers:
            return f"{self.readers} shared"
        return "free"


@dataclass(frozen=True, slots=True)
class FrameSite:
    """One stack frame of a borrow origin."""

    filename: str
    lineno: int | None
    name: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.lineno} in {self.name}"


@dataclass(frozen=True, slots=True)
class BorrowOrigin:
    """Call site that acquired a live borrow (recorded when origin tracking is on).

    Attributes:
        mode: Access mode of the borrow.
        frames: Stack frames ending at the borrowing call, oldest first.
    """

    mode: BorrowMode
    frames: tuple[FrameSite, ...]

    def __str__(self) -> str:
        mode = self.mode.name.lower()
        if not self.frames:
            return f"{mode} borrow at <unknown>"
        sites = " <- ".join(str(frame) for frame in reversed(self.frames))
        return f"{mode} borrow at {sites}"
