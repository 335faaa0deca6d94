"""Per-slot borrow discipline: many readers or one writer, checked at runtime."""

from __future__ import annotations

from contextlib import contextmanager

from cons_core.errors import ConcurrentAccessError
from cons_core.metrics import _metrics_tick_conflict

READ = "read"
WRITE = "write"

_WRITER = -1


class BorrowTracker:
    """Tracks live borrows by slot.

    The count for a slot is the number of live readers, or -1 while a writer
    holds it. Slots with no live borrow are absent.
    """

    __slots__ = ("_held", "enabled")

    def __init__(self, enabled: bool = True):
        self._held: dict[int, int] = {}
        self.enabled = enabled

    def mode(self, slot: int) -> str | None:
        held = self._held.get(slot, 0)
        if held == _WRITER:
            return WRITE
        if held > 0:
            return READ
        return None

    def acquire_read(self, slot: int) -> None:
        if not self.enabled:
            return
        held = self._held.get(slot, 0)
        if held == _WRITER:
            _metrics_tick_conflict()
            raise ConcurrentAccessError(slot=slot, held=WRITE, requested=READ)
        self._held[slot] = held + 1

    def release_read(self, slot: int) -> None:
        if not self.enabled:
            return
        held = self._held.get(slot, 0)
        if held <= 1:
            self._held.pop(slot, None)
        else:
            self._held[slot] = held - 1

    def acquire_write(self, slot: int) -> None:
        if not self.enabled:
            return
        held = self.mode(slot)
        if held is not None:
            _metrics_tick_conflict()
            raise ConcurrentAccessError(slot=slot, held=held, requested=WRITE)
        self._held[slot] = _WRITER

    def release_write(self, slot: int) -> None:
        if not self.enabled:
            return
        self._held.pop(slot, None)

    @contextmanager
    def reading(self, slot: int):
        self.acquire_read(slot)
        try:
            yield
        finally:
            self.release_read(slot)

    @contextmanager
    def writing(self, slot: int):
        self.acquire_write(slot)
        try:
            yield
        finally:
            self.release_write(slot)

    def active(self) -> int:
        return len(self._held)

    def first_held(self) -> int | None:
        return next(iter(self._held), None)

    def clear(self) -> None:
        self._held.clear()


__all__ = ["READ", "WRITE", "BorrowTracker"]
