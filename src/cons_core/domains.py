"""Shared domain types and sentinel conventions.

Handles, node values and row tags used by both the arena and the expression
graph. Nothing here touches device state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NewType, Union

from cons_core.errors import AtomValueError

Slot = NewType("Slot", int)
SymbolId = NewType("SymbolId", int)

# Row tags (device column `tag`).
TAG_FREE = 0
TAG_INT = 1
TAG_SYMBOL = 2
TAG_PAIR = 3

TAG_NAMES = {
    TAG_FREE: "free",
    TAG_INT: "int",
    TAG_SYMBOL: "symbol",
    TAG_PAIR: "pair",
}

# Slot 0 is the null row and is never issued; slot 1 holds the seeded nil.
NULL_SLOT = 0
NIL_SLOT = 1
NIL_SYMBOL = "nil"

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


@dataclass(frozen=True, slots=True)
class Handle:
    """Non-owning reference to an arena slot.

    Only an arena mints handles (`Arena.alloc`, `Arena.nil`, or reading a
    pair back). A hand-built Handle gets no access of its own: every operation
    passes it through `Arena.check`, which rejects slots the arena never issued
    in its current epoch. Two handles are equal when they name the same slot of
    the same arena epoch.
    """

    arena_id: int
    slot: int
    epoch: int = 0

    def __repr__(self) -> str:
        return f"Handle(#{self.slot}@{self.arena_id}.{self.epoch})"


AtomValue = Union[int, str]


@dataclass(frozen=True, slots=True)
class Atom:
    value: AtomValue

    def __post_init__(self):
        object.__setattr__(self, "value", coerce_atom_value(self.value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Pair:
    first: Handle
    second: Handle

    def __post_init__(self):
        for name in ("first", "second"):
            if not isinstance(getattr(self, name), Handle):
                raise TypeError(f"Pair.{name} must be a Handle")


Node = Union[Atom, Pair]


def coerce_atom_value(value) -> AtomValue:
    # bool is an int subclass but is not an integer atom.
    if isinstance(value, bool):
        raise AtomValueError(value=value, reason="bool is not an atom value")
    if isinstance(value, int):
        if value < INT64_MIN or value > INT64_MAX:
            raise AtomValueError(value=value, reason="outside signed 64-bit range")
        return int(value)
    if isinstance(value, str):
        return value
    raise AtomValueError(value=value, reason="expected int or str")


def coerce_node(value) -> Node:
    """Accept a Node as-is, or wrap a bare atom value in an Atom."""
    if isinstance(value, (Atom, Pair)):
        return value
    return Atom(value)


def is_nil_value(value) -> bool:
    return isinstance(value, str) and value == NIL_SYMBOL


__all__ = [
    "Slot",
    "SymbolId",
    "TAG_FREE",
    "TAG_INT",
    "TAG_SYMBOL",
    "TAG_PAIR",
    "TAG_NAMES",
    "NULL_SLOT",
    "NIL_SLOT",
    "NIL_SYMBOL",
    "INT64_MIN",
    "INT64_MAX",
    "Handle",
    "AtomValue",
    "Atom",
    "Pair",
    "Node",
    "coerce_atom_value",
    "coerce_node",
    "is_nil_value",
]
