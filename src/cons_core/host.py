from __future__ import annotations

from dataclasses import dataclass

import jax

_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True)
class HostInt:
    v: int

    def __int__(self) -> int:
        return int(self.v)

    def __index__(self) -> int:
        return int(self.v)


def _host_int(value) -> HostInt:
    if isinstance(value, HostInt):
        return value
    if isinstance(value, bool):
        raise TypeError("expected HostInt, got bool")
    return HostInt(int(jax.device_get(value)))


def _host_int_value(value) -> int:
    return int(_host_int(value))


def split_int64(value: int) -> tuple[int, int]:
    """Split a signed 64-bit int into (hi, lo) unsigned 32-bit words."""
    raw = value & ((1 << 64) - 1)
    return (raw >> 32) & _MASK32, raw & _MASK32


def join_int64(hi: int, lo: int) -> int:
    raw = ((int(hi) & _MASK32) << 32) | (int(lo) & _MASK32)
    if raw >= 1 << 63:
        raw -= 1 << 64
    return raw


__all__ = [
    "HostInt",
    "_host_int",
    "_host_int_value",
    "split_int64",
    "join_int64",
]
