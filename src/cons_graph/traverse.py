"""List traversal along the second chain.

A chain of pairs is walked by taking each pair's first and moving to its
second. The walk stops at the first atom reached: the nil terminator for a
proper list, any other atom for an improper one. There is no cycle detection
unless TraverseConfig.cycle_guard is set; a cyclic chain otherwise yields
forever.
"""

from __future__ import annotations

from typing import Iterator

from cons_arena.arena import Arena
from cons_core.config import TraverseConfig, traverse_config_from_env
from cons_core.domains import Atom, Handle, is_nil_value
from cons_core.errors import CycleError
from cons_core.log import GRAPH_LOG


def _traverse_config(config: TraverseConfig | None) -> TraverseConfig:
    return config if config is not None else traverse_config_from_env()


def _cycle(slot: int, op: str) -> CycleError:
    GRAPH_LOG.warning("%s: cycle guard tripped at slot %d", op, slot)
    return CycleError(slot=slot, op=op)


def _walk(arena: Arena, h: Handle, guard: bool, op: str):
    # Yields (pair_handle, first) per pair, then returns the terminating atom.
    seen = set() if guard else None
    current = h
    while True:
        node = arena.resolve(current)
        if isinstance(node, Atom):
            return current
        if seen is not None:
            if current.slot in seen:
                raise _cycle(current.slot, op)
            seen.add(current.slot)
        yield current, node.first
        current = node.second


def _iterate(arena: Arena, h: Handle, guard: bool) -> Iterator[Handle]:
    for _, first in _walk(arena, h, guard, "iterate"):
        yield first


def iterate(
    arena: Arena, h: Handle, *, config: TraverseConfig | None = None
) -> Iterator[Handle]:
    """Lazily yield the first of each pair along the chain starting at `h`.

    Each call starts a fresh walk over the current structure.
    """
    arena.check(h)
    return _iterate(arena, h, _traverse_config(config).cycle_guard)


def tail_of(arena: Arena, h: Handle, *, config: TraverseConfig | None = None) -> Handle:
    """Handle of the atom where iteration from `h` stops."""
    walk = _walk(arena, h, _traverse_config(config).cycle_guard, "tail_of")
    while True:
        try:
            next(walk)
        except StopIteration as stop:
            return stop.value


def length(arena: Arena, h: Handle, *, config: TraverseConfig | None = None) -> int:
    return sum(1 for _ in iterate(arena, h, config=config))


def is_proper_list(
    arena: Arena, h: Handle, *, config: TraverseConfig | None = None
) -> bool:
    tail = arena.resolve(tail_of(arena, h, config=config))
    return is_nil_value(tail.value)


__all__ = ["iterate", "tail_of", "length", "is_proper_list"]
