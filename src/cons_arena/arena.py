"""The arena: sole owner of every node, issuing handles that name slots.

Nodes live as rows of an ArenaState (see cons_arena.state). Handles carry the
arena id and epoch so that handles from another arena, from before a reset,
or from after teardown are rejected instead of reading whatever row now sits
at that slot.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from typing import Iterator

import jax.numpy as jnp

from cons_arena.borrow import BorrowTracker
from cons_arena.intern import SymbolTable
from cons_arena.state import (
    ArenaState,
    Row,
    append_row,
    grow_state,
    init_state,
    read_row,
    row_args,
    state_capacity,
    write_row,
)
from cons_core.config import ArenaConfig, arena_config_from_env
from cons_core.domains import (
    NIL_SLOT,
    NIL_SYMBOL,
    NULL_SLOT,
    TAG_INT,
    TAG_NAMES,
    TAG_PAIR,
    TAG_SYMBOL,
    Atom,
    Handle,
    Node,
    Pair,
    Slot,
    coerce_atom_value,
    coerce_node,
)
from cons_core.errors import (
    ArenaExhaustedError,
    ConcurrentAccessError,
    ConsArenaError,
    DanglingError,
    ForeignHandleError,
    NotAnAtomError,
    NotAPairError,
)
from cons_core.host import _host_int_value, join_int64, split_int64
from cons_core.log import ARENA_LOG
from cons_core.metrics import (
    _metrics_tick_alloc,
    _metrics_tick_grow,
    _metrics_tick_mutation,
)

_ARENA_IDS = itertools.count(1)


class SlotWriter:
    """Exclusive write view of one slot, valid inside its resolve_mut block."""

    __slots__ = ("_arena", "_slot", "_open")

    def __init__(self, arena: "Arena", slot: int):
        self._arena = arena
        self._slot = slot
        self._open = True

    @property
    def slot(self) -> int:
        return self._slot

    def _require_open(self) -> None:
        if not self._open:
            raise ConsArenaError(
                f"writer for slot {self._slot} used outside its resolve_mut block"
            )

    @property
    def node(self) -> Node:
        self._require_open()
        return self._arena._load(self._slot)

    def set(self, node) -> None:
        self._require_open()
        self._arena._store(self._slot, coerce_node(node))

    def set_first(self, first: Handle) -> None:
        current = self.node
        if not isinstance(current, Pair):
            raise NotAPairError(slot=self._slot, op="set_first")
        self._arena._store(self._slot, Pair(first, current.second))

    def set_second(self, second: Handle) -> None:
        current = self.node
        if not isinstance(current, Pair):
            raise NotAPairError(slot=self._slot, op="set_second")
        self._arena._store(self._slot, Pair(current.first, second))

    def set_value(self, value) -> None:
        current = self.node
        if not isinstance(current, Atom):
            raise NotAnAtomError(slot=self._slot, op="set_value")
        self._arena._store(self._slot, Atom(coerce_atom_value(value)))

    def _close(self) -> None:
        self._open = False


class Arena:
    """Append-only node store for one session.

    Slot 0 is never issued. Slot 1 is seeded with the empty-list atom `nil`
    and is available as `arena.nil`. Every other node is created by `alloc`
    and lives until `close()` or `reset()`.
    """

    def __init__(self, config: ArenaConfig | None = None):
        self.config = config if config is not None else arena_config_from_env()
        self.arena_id = next(_ARENA_IDS)
        self.epoch = 0
        self.closed = False
        self.symbols = SymbolTable()
        self.borrows = BorrowTracker(enabled=self.config.borrow_check)
        self._state: ArenaState | None = None
        self._count = 0
        self._seed()
        ARENA_LOG.debug(
            "arena %d created capacity=%d", self.arena_id, self.capacity
        )

    def _seed(self) -> None:
        nil_id = self.symbols.intern(NIL_SYMBOL)
        self._state = init_state(self.config.initial_capacity, nil_id)
        self._count = _host_int_value(self._state.count)

    # -- lifecycle -------------------------------------------------------

    def __enter__(self) -> "Arena":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self.closed:
            self.close()

    def _require_idle(self, op: str) -> None:
        slot = self.borrows.first_held()
        if slot is not None:
            raise ConcurrentAccessError(
                slot=slot, held=self.borrows.mode(slot), requested=op
            )

    def close(self) -> None:
        """Tear down the arena; every handle it issued becomes dangling."""
        if self.closed:
            return
        self._require_idle("teardown")
        ARENA_LOG.debug("arena %d torn down with %d nodes", self.arena_id, len(self))
        self.closed = True
        self._state = None
        self._count = 0
        self.symbols.clear()
        self.borrows.clear()

    def reset(self) -> None:
        """Discard every node and start a new epoch with a fresh nil."""
        self._require_open()
        self._require_idle("reset")
        ARENA_LOG.debug(
            "arena %d reset at epoch %d with %d nodes",
            self.arena_id,
            self.epoch,
            len(self),
        )
        self.epoch += 1
        self.symbols.clear()
        self._seed()

    def _require_open(self, slot: int = NULL_SLOT) -> None:
        if self.closed:
            raise DanglingError(slot=slot, reason="arena has been torn down")

    # -- introspection ---------------------------------------------------

    @property
    def state(self) -> ArenaState | None:
        return self._state

    @property
    def capacity(self) -> int:
        if self._state is None:
            return 0
        return state_capacity(self._state)

    @property
    def nil(self) -> Handle:
        self._require_open(NIL_SLOT)
        return Handle(self.arena_id, NIL_SLOT, self.epoch)

    def __len__(self) -> int:
        if self.closed:
            return 0
        return self._count - 1

    def __contains__(self, handle) -> bool:
        return (
            isinstance(handle, Handle)
            and not self.closed
            and handle.arena_id == self.arena_id
            and handle.epoch == self.epoch
            and NULL_SLOT < handle.slot < self._count
        )

    def handles(self) -> Iterator[Handle]:
        self._require_open()
        for slot in range(NULL_SLOT + 1, self._count):
            yield Handle(self.arena_id, slot, self.epoch)

    def __repr__(self) -> str:
        status = "closed" if self.closed else f"{len(self)} nodes"
        return f"Arena(id={self.arena_id}, epoch={self.epoch}, {status})"

    # -- handle checks and row codec ------------------------------------

    def check(self, handle: Handle) -> Slot:
        """Return the slot a live handle names, or raise."""
        if not isinstance(handle, Handle):
            raise TypeError(f"expected Handle, got {type(handle).__name__}")
        self._require_open(handle.slot)
        if handle.arena_id != self.arena_id:
            raise ForeignHandleError(
                slot=handle.slot,
                arena_id=handle.arena_id,
                expected_arena_id=self.arena_id,
            )
        if handle.epoch != self.epoch:
            raise DanglingError(
                slot=handle.slot,
                reason=f"issued in epoch {handle.epoch}, arena is at {self.epoch}",
            )
        if not NULL_SLOT < handle.slot < self._count:
            raise DanglingError(slot=handle.slot, reason="slot was never issued")
        return Slot(handle.slot)

    def _encode(self, node: Node) -> tuple:
        if isinstance(node, Pair):
            first = self.check(node.first)
            second = self.check(node.second)
            return row_args(TAG_PAIR, first, second, 0, 0)
        value = node.value
        if isinstance(value, str):
            return row_args(TAG_SYMBOL, 0, 0, 0, self.symbols.intern(value))
        hi, lo = split_int64(value)
        return row_args(TAG_INT, 0, 0, hi, lo)

    def _decode(self, slot: int, row: Row) -> Node:
        if row.tag == TAG_PAIR:
            return Pair(
                Handle(self.arena_id, row.first, self.epoch),
                Handle(self.arena_id, row.second, self.epoch),
            )
        if row.tag == TAG_SYMBOL:
            return Atom(self.symbols.name(row.value_lo))
        if row.tag == TAG_INT:
            return Atom(join_int64(row.value_hi, row.value_lo))
        raise DanglingError(
            slot=slot, reason=f"row holds no node (tag {TAG_NAMES.get(row.tag, row.tag)})"
        )

    def _load(self, slot: int) -> Node:
        return self._decode(slot, read_row(self._state, slot))

    def _store(self, slot: int, node: Node) -> None:
        args = self._encode(node)
        self._state = write_row(self._state, jnp.int32(slot), *args)
        _metrics_tick_mutation()

    def _ensure_capacity(self, needed: int) -> None:
        capacity = self.capacity
        if needed <= capacity:
            return
        limit = self.config.max_capacity
        if needed > limit:
            raise ArenaExhaustedError(requested=needed, max_capacity=limit)
        new_capacity = min(max(capacity * self.config.growth_factor, needed), limit)
        self._state = grow_state(self._state, new_capacity)
        _metrics_tick_grow()
        ARENA_LOG.debug(
            "arena %d grew %d -> %d", self.arena_id, capacity, new_capacity
        )

    # -- operations ------------------------------------------------------

    def alloc(self, node) -> Handle:
        """Take ownership of `node` and return a handle to its new slot."""
        self._require_open()
        args = self._encode(coerce_node(node))
        self._ensure_capacity(self._count + 1)
        self._state, slot = append_row(self._state, *args)
        slot = _host_int_value(slot)
        self._count = slot + 1
        _metrics_tick_alloc()
        return Handle(self.arena_id, slot, self.epoch)

    def resolve(self, handle: Handle) -> Node:
        """Snapshot of the node's current content, read under a short borrow."""
        slot = self.check(handle)
        with self.borrows.reading(slot):
            return self._load(slot)

    @contextmanager
    def borrow(self, handle: Handle):
        """Hold a read borrow on the slot for the duration of the block."""
        slot = self.check(handle)
        with self.borrows.reading(slot):
            yield self._load(slot)

    @contextmanager
    def resolve_mut(self, handle: Handle):
        """Exclusive write access to the slot; yields a SlotWriter."""
        slot = self.check(handle)
        with self.borrows.writing(slot):
            writer = SlotWriter(self, slot)
            try:
                yield writer
            finally:
                writer._close()


__all__ = ["Arena", "SlotWriter"]
