from __future__ import annotations

import os
from dataclasses import dataclass

from cons_core.errors import ConsConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")

MAX_SLOTS = (1 << 31) - 1  # int32 slot columns


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name, "").strip().lower()
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConsConfigError(name=name, value=value, expected="a boolean flag")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    if not value.isdigit():
        raise ConsConfigError(name=name, value=value, expected="a positive integer")
    return int(value)


@dataclass(frozen=True, slots=True)
class ArenaConfig:
    """Arena sizing and access-discipline bundle.

    initial_capacity:
      rows allocated up front, including the null row and the seeded nil
    max_capacity:
      hard ceiling; growing past it raises ArenaExhaustedError
    growth_factor:
      capacity multiplier applied when the arena is full
    borrow_check:
      enforce the per-slot single-writer/many-reader discipline
    """

    initial_capacity: int = 64
    max_capacity: int = MAX_SLOTS
    growth_factor: int = 2
    borrow_check: bool = True

    def __post_init__(self):
        if self.initial_capacity < 2:
            raise ConsConfigError(
                name="initial_capacity",
                value=self.initial_capacity,
                expected="at least 2 (null row and nil)",
            )
        if not 2 <= self.max_capacity <= MAX_SLOTS:
            raise ConsConfigError(
                name="max_capacity",
                value=self.max_capacity,
                expected=f"between 2 and {MAX_SLOTS}",
            )
        if self.initial_capacity > self.max_capacity:
            raise ConsConfigError(
                name="initial_capacity",
                value=self.initial_capacity,
                expected=f"at most max_capacity={self.max_capacity}",
            )
        if self.growth_factor < 2:
            raise ConsConfigError(
                name="growth_factor", value=self.growth_factor, expected="at least 2"
            )


@dataclass(frozen=True, slots=True)
class TraverseConfig:
    """Traversal bundle; cycle_guard trades a visited set for termination."""

    cycle_guard: bool = False


DEFAULT_ARENA_CONFIG = ArenaConfig()
DEFAULT_TRAVERSE_CONFIG = TraverseConfig()


def arena_config_from_env() -> ArenaConfig:
    return ArenaConfig(
        initial_capacity=_env_int(
            "CONS_ARENA_INITIAL_CAPACITY", DEFAULT_ARENA_CONFIG.initial_capacity
        ),
        max_capacity=_env_int(
            "CONS_ARENA_MAX_CAPACITY", DEFAULT_ARENA_CONFIG.max_capacity
        ),
        borrow_check=_env_flag("CONS_BORROW_CHECK", DEFAULT_ARENA_CONFIG.borrow_check),
    )


def traverse_config_from_env() -> TraverseConfig:
    return TraverseConfig(
        cycle_guard=_env_flag("CONS_CYCLE_GUARD", DEFAULT_TRAVERSE_CONFIG.cycle_guard)
    )


__all__ = [
    "MAX_SLOTS",
    "ArenaConfig",
    "TraverseConfig",
    "DEFAULT_ARENA_CONFIG",
    "DEFAULT_TRAVERSE_CONFIG",
    "arena_config_from_env",
    "traverse_config_from_env",
    "_env_flag",
    "_env_int",
]
