from __future__ import annotations

from dataclasses import dataclass


class ConsArenaError(Exception):
    """Base class for every error raised by the cons arena packages."""


@dataclass(eq=False)
class NotAPairError(ConsArenaError, TypeError):
    slot: int
    op: str | None = None

    def __str__(self) -> str:
        if self.op:
            return f"{self.op}: slot {self.slot} is an atom, not a pair"
        return f"slot {self.slot} is an atom, not a pair"


@dataclass(eq=False)
class NotAnAtomError(ConsArenaError, TypeError):
    slot: int
    op: str | None = None

    def __str__(self) -> str:
        if self.op:
            return f"{self.op}: slot {self.slot} is a pair, not an atom"
        return f"slot {self.slot} is a pair, not an atom"


@dataclass(eq=False)
class DanglingError(ConsArenaError, LookupError):
    slot: int
    reason: str = "arena no longer holds this slot"

    def __str__(self) -> str:
        return f"dangling handle to slot {self.slot}: {self.reason}"


@dataclass(eq=False)
class ForeignHandleError(ConsArenaError, ValueError):
    slot: int
    arena_id: int
    expected_arena_id: int

    def __str__(self) -> str:
        return (
            f"handle to slot {self.slot} belongs to arena {self.arena_id}, "
            f"not arena {self.expected_arena_id}"
        )


@dataclass(eq=False)
class ConcurrentAccessError(ConsArenaError, RuntimeError):
    slot: int
    held: str
    requested: str

    def __str__(self) -> str:
        return (
            f"slot {self.slot}: {self.requested} access requested while "
            f"{self.held} access is held"
        )


@dataclass(eq=False)
class ArenaExhaustedError(ConsArenaError, MemoryError):
    requested: int
    max_capacity: int

    def __str__(self) -> str:
        return (
            f"arena exhausted: {self.requested} slots needed, "
            f"max_capacity={self.max_capacity}"
        )


@dataclass(eq=False)
class AtomValueError(ConsArenaError, ValueError):
    value: object
    reason: str

    def __str__(self) -> str:
        return f"invalid atom value {self.value!r}: {self.reason}"


@dataclass(eq=False)
class CycleError(ConsArenaError, RuntimeError):
    slot: int
    op: str

    def __str__(self) -> str:
        return f"{self.op}: cycle detected at slot {self.slot}"


@dataclass(eq=False)
class ConsConfigError(ConsArenaError, ValueError):
    name: str
    value: object
    expected: str

    def __str__(self) -> str:
        return f"{self.name}={self.value!r}: expected {self.expected}"


__all__ = [
    "ConsArenaError",
    "NotAPairError",
    "NotAnAtomError",
    "DanglingError",
    "ForeignHandleError",
    "ConcurrentAccessError",
    "ArenaExhaustedError",
    "AtomValueError",
    "CycleError",
    "ConsConfigError",
]
