"""Textual rendering.

    expr := atom | pair
    atom := integer | symbol
    pair := "(" expr " . " expr ")"

Both renderers work from an explicit stack: each node is resolved on its own,
only its child handles are kept, and no borrow is held while children are
rendered. Deep chains therefore do not hit the recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass

from cons_arena.arena import Arena
from cons_core.config import TraverseConfig
from cons_core.domains import Atom, Handle, is_nil_value
from cons_graph.traverse import _cycle, _traverse_config, _walk


@dataclass(frozen=True, slots=True)
class _Enter:
    slot: int


@dataclass(frozen=True, slots=True)
class _Leave:
    slots: tuple


def _atom_text(node: Atom) -> str:
    return str(node.value)


def render(arena: Arena, h: Handle, *, config: TraverseConfig | None = None) -> str:
    """Canonical dotted form of the structure currently at `h`."""
    arena.check(h)
    path = set() if _traverse_config(config).cycle_guard else None
    out = []
    stack = [h]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        if isinstance(item, _Leave):
            path.difference_update(item.slots)
            continue
        node = arena.resolve(item)
        if isinstance(node, Atom):
            out.append(_atom_text(node))
            continue
        if path is not None:
            if item.slot in path:
                raise _cycle(item.slot, "render")
            path.add(item.slot)
            stack.append(_Leave((item.slot,)))
        out.append("(")
        stack.extend((")", node.second, " . ", node.first))
    return "".join(out)


def render_list(
    arena: Arena, h: Handle, *, config: TraverseConfig | None = None
) -> str:
    """List-sugar form: (1 2 3) for proper lists, (1 2 . 3) for improper ones."""
    arena.check(h)
    guard = _traverse_config(config).cycle_guard
    path = set() if guard else None
    out = []
    stack = [h]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        if isinstance(item, _Leave):
            path.difference_update(item.slots)
            continue
        if isinstance(item, _Enter):
            if item.slot in path:
                raise _cycle(item.slot, "render_list")
            path.add(item.slot)
            continue
        node = arena.resolve(item)
        if isinstance(node, Atom):
            out.append(_atom_text(node))
            continue
        chain = []
        elements = []
        walk = _walk(arena, item, guard, "render_list")
        while True:
            try:
                pair, first = next(walk)
            except StopIteration as stop:
                tail = stop.value
                break
            chain.append(pair.slot)
            elements.append(first)
        parts = []
        for i, element in enumerate(elements):
            if i:
                parts.append(" ")
            if path is not None:
                # element i sits below chain pairs 0..i only
                parts.append(_Enter(chain[i]))
            parts.append(element)
        if is_nil_value(arena.resolve(tail).value):
            parts.append(")")
        else:
            parts.extend((" . ", tail, ")"))
        if path is not None:
            parts.append(_Leave(tuple(chain)))
        out.append("(")
        stack.extend(reversed(parts))
    return "".join(out)


__all__ = ["render", "render_list"]
