"""Accessors and in-place mutation.

Every mutation rewrites the row behind a handle, so the change is seen through
all handles to that slot and through every pair that points at it.
"""

from __future__ import annotations

from cons_arena.arena import Arena
from cons_core.domains import Atom, AtomValue, Handle, Node, Pair, is_nil_value
from cons_core.errors import NotAnAtomError, NotAPairError


def node_of(arena: Arena, h: Handle) -> Node:
    return arena.resolve(h)


def _pair(arena: Arena, h: Handle, op: str) -> Pair:
    node = arena.resolve(h)
    if not isinstance(node, Pair):
        raise NotAPairError(slot=h.slot, op=op)
    return node


def first_of(arena: Arena, h: Handle) -> Handle:
    return _pair(arena, h, "first_of").first


def second_of(arena: Arena, h: Handle) -> Handle:
    return _pair(arena, h, "second_of").second


def value_of(arena: Arena, h: Handle) -> AtomValue:
    node = arena.resolve(h)
    if not isinstance(node, Atom):
        raise NotAnAtomError(slot=h.slot, op="value_of")
    return node.value


def is_atom(arena: Arena, h: Handle) -> bool:
    return isinstance(arena.resolve(h), Atom)


def is_pair(arena: Arena, h: Handle) -> bool:
    return isinstance(arena.resolve(h), Pair)


def is_nil(arena: Arena, h: Handle) -> bool:
    node = arena.resolve(h)
    return isinstance(node, Atom) and is_nil_value(node.value)


def set_first(arena: Arena, h: Handle, new_first: Handle) -> None:
    arena.check(new_first)
    with arena.resolve_mut(h) as slot:
        slot.set_first(new_first)


def set_second(arena: Arena, h: Handle, new_second: Handle) -> None:
    arena.check(new_second)
    with arena.resolve_mut(h) as slot:
        slot.set_second(new_second)


def set_value(arena: Arena, h: Handle, new_value) -> None:
    with arena.resolve_mut(h) as slot:
        slot.set_value(new_value)


def replace(arena: Arena, h: Handle, node) -> None:
    """Overwrite the whole node at `h`; atom <-> pair changes are allowed."""
    with arena.resolve_mut(h) as slot:
        slot.set(node)


__all__ = [
    "node_of",
    "first_of",
    "second_of",
    "value_of",
    "is_atom",
    "is_pair",
    "is_nil",
    "set_first",
    "set_second",
    "set_value",
    "replace",
]
