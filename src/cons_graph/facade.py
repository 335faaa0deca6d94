"""Object facade binding the expression-graph operations to one arena."""

from __future__ import annotations

from cons_arena.arena import Arena
from cons_core.config import ArenaConfig, TraverseConfig, traverse_config_from_env
from cons_core.domains import Handle
from cons_graph import access as _access
from cons_graph import construct as _construct
from cons_graph import printer as _printer
from cons_graph import traverse as _traverse


class ExprGraph:
    """All graph operations over one explicitly owned arena.

    Passing an existing arena shares it; otherwise a fresh one is created from
    `arena_config` (or the environment). Usable as a context manager, which
    tears the arena down on exit.
    """

    def __init__(
        self,
        arena: Arena | None = None,
        *,
        arena_config: ArenaConfig | None = None,
        traverse_config: TraverseConfig | None = None,
    ):
        self.arena = arena if arena is not None else Arena(arena_config)
        self.traverse_config = (
            traverse_config
            if traverse_config is not None
            else traverse_config_from_env()
        )

    def __enter__(self) -> "ExprGraph":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.arena.close()

    @property
    def nil(self) -> Handle:
        return self.arena.nil

    # construction
    def atom(self, value) -> Handle:
        return _construct.atom(self.arena, value)

    def cons(self, first: Handle, second: Handle) -> Handle:
        return _construct.cons(self.arena, first, second)

    def build(self, items) -> Handle:
        return _construct.build(self.arena, items)

    # accessors
    def resolve(self, h: Handle):
        return _access.node_of(self.arena, h)

    def first_of(self, h: Handle) -> Handle:
        return _access.first_of(self.arena, h)

    def second_of(self, h: Handle) -> Handle:
        return _access.second_of(self.arena, h)

    def value_of(self, h: Handle):
        return _access.value_of(self.arena, h)

    def is_atom(self, h: Handle) -> bool:
        return _access.is_atom(self.arena, h)

    def is_pair(self, h: Handle) -> bool:
        return _access.is_pair(self.arena, h)

    def is_nil(self, h: Handle) -> bool:
        return _access.is_nil(self.arena, h)

    # mutation
    def set_first(self, h: Handle, new_first: Handle) -> None:
        _access.set_first(self.arena, h, new_first)

    def set_second(self, h: Handle, new_second: Handle) -> None:
        _access.set_second(self.arena, h, new_second)

    def set_value(self, h: Handle, new_value) -> None:
        _access.set_value(self.arena, h, new_value)

    def replace(self, h: Handle, node) -> None:
        _access.replace(self.arena, h, node)

    # traversal
    def iterate(self, h: Handle):
        return _traverse.iterate(self.arena, h, config=self.traverse_config)

    def tail_of(self, h: Handle) -> Handle:
        return _traverse.tail_of(self.arena, h, config=self.traverse_config)

    def length(self, h: Handle) -> int:
        return _traverse.length(self.arena, h, config=self.traverse_config)

    def is_proper_list(self, h: Handle) -> bool:
        return _traverse.is_proper_list(self.arena, h, config=self.traverse_config)

    # rendering
    def render(self, h: Handle) -> str:
        return _printer.render(self.arena, h, config=self.traverse_config)

    def render_list(self, h: Handle) -> str:
        return _printer.render_list(self.arena, h, config=self.traverse_config)


__all__ = ["ExprGraph"]
