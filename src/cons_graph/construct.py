from __future__ import annotations

from typing import Iterable

from cons_arena.arena import Arena
from cons_core.domains import Atom, Handle, Pair


def atom(arena: Arena, value) -> Handle:
    """Allocate an integer or symbol atom."""
    return arena.alloc(Atom(value))


def cons(arena: Arena, first: Handle, second: Handle) -> Handle:
    """Allocate a pair pointing at two existing handles of the same arena."""
    return arena.alloc(Pair(first, second))


def nil(arena: Arena) -> Handle:
    return arena.nil


def _element(arena: Arena, item) -> Handle:
    if isinstance(item, Handle):
        arena.check(item)
        return item
    if isinstance(item, (list, tuple)):
        return build(arena, item)
    return atom(arena, item)


def build(arena: Arena, items: Iterable) -> Handle:
    """Build a proper list ending in arena.nil.

    build(arena, [e1, e2, e3]) == cons(e1, cons(e2, cons(e3, nil))). Elements
    may be handles, atom values, or nested lists/tuples (built the same way).
    """
    elements = [_element(arena, item) for item in items]
    tail = arena.nil
    for element in reversed(elements):
        tail = cons(arena, element, tail)
    return tail


__all__ = ["atom", "cons", "nil", "build"]
