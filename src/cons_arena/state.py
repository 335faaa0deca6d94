"""Columnar device state for the arena and its row kernels.

One row per slot. Pairs use the `first`/`second` slot columns; integer atoms
split their 64-bit value over `value_hi`/`value_lo`; symbol atoms keep their
interned id in `value_lo`. Row 0 is the null row, row 1 the seeded nil.
"""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp

from cons_core.domains import NIL_SLOT, TAG_SYMBOL


class ArenaState(NamedTuple):
    tag: jnp.ndarray
    first: jnp.ndarray
    second: jnp.ndarray
    value_hi: jnp.ndarray
    value_lo: jnp.ndarray
    count: jnp.ndarray


class Row(NamedTuple):
    """Host copy of one row."""

    tag: int
    first: int
    second: int
    value_hi: int
    value_lo: int


_COLUMN_DTYPES = (
    ("tag", jnp.int8),
    ("first", jnp.int32),
    ("second", jnp.int32),
    ("value_hi", jnp.uint32),
    ("value_lo", jnp.uint32),
)


def init_state(capacity: int, nil_symbol_id: int) -> ArenaState:
    state = ArenaState(
        tag=jnp.zeros(capacity, dtype=jnp.int8),
        first=jnp.zeros(capacity, dtype=jnp.int32),
        second=jnp.zeros(capacity, dtype=jnp.int32),
        value_hi=jnp.zeros(capacity, dtype=jnp.uint32),
        value_lo=jnp.zeros(capacity, dtype=jnp.uint32),
        count=jnp.array(NIL_SLOT + 1, dtype=jnp.int32),
    )
    return state._replace(
        tag=state.tag.at[NIL_SLOT].set(TAG_SYMBOL),
        value_lo=state.value_lo.at[NIL_SLOT].set(jnp.uint32(nil_symbol_id)),
    )


def state_capacity(state: ArenaState) -> int:
    return int(state.tag.shape[0])


def grow_state(state: ArenaState, capacity: int) -> ArenaState:
    extra = capacity - state_capacity(state)
    if extra <= 0:
        return state
    columns = {
        name: jnp.concatenate([getattr(state, name), jnp.zeros(extra, dtype=dtype)])
        for name, dtype in _COLUMN_DTYPES
    }
    return state._replace(**columns)


def _write_row_core(state, slot, tag, first, second, value_hi, value_lo):
    return state._replace(
        tag=state.tag.at[slot].set(tag),
        first=state.first.at[slot].set(first),
        second=state.second.at[slot].set(second),
        value_hi=state.value_hi.at[slot].set(value_hi),
        value_lo=state.value_lo.at[slot].set(value_lo),
    )


@jax.jit
def write_row(state, slot, tag, first, second, value_hi, value_lo):
    """Overwrite one row in place (same slot, new content)."""
    return _write_row_core(state, slot, tag, first, second, value_hi, value_lo)


@jax.jit
def append_row(state, tag, first, second, value_hi, value_lo):
    """Write the next free row; caller guarantees count < capacity."""
    slot = state.count
    state = _write_row_core(state, slot, tag, first, second, value_hi, value_lo)
    return state._replace(count=slot + jnp.int32(1)), slot


def row_args(tag: int, first: int, second: int, value_hi: int, value_lo: int):
    return (
        jnp.int8(tag),
        jnp.int32(first),
        jnp.int32(second),
        jnp.uint32(value_hi),
        jnp.uint32(value_lo),
    )


def read_row(state: ArenaState, slot: int) -> Row:
    values = jax.device_get(
        (
            state.tag[slot],
            state.first[slot],
            state.second[slot],
            state.value_hi[slot],
            state.value_lo[slot],
        )
    )
    return Row(*(int(v) for v in values))


__all__ = [
    "ArenaState",
    "Row",
    "init_state",
    "state_capacity",
    "grow_state",
    "write_row",
    "append_row",
    "row_args",
    "read_row",
]
