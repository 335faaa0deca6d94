import os
import sys

import pytest

# Disable preallocation unless explicitly set.
os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")
# Count allocations/mutations in tests unless explicitly overridden.
os.environ.setdefault("CONS_ARENA_METRICS", "1")

import jax

# Ensure repo root and src/ are importable when pytest uses importlib mode.
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, "src")
for _path in (SRC, ROOT):
    if _path not in sys.path:
        sys.path.insert(0, _path)

from cons_arena import Arena
from cons_core.config import ArenaConfig
from cons_graph import ExprGraph

_CONS_ENV = (
    "CONS_ARENA_INITIAL_CAPACITY",
    "CONS_ARENA_MAX_CAPACITY",
    "CONS_BORROW_CHECK",
    "CONS_CYCLE_GUARD",
)


@pytest.fixture(autouse=True)
def _set_default_device():
    with jax.default_device(jax.devices("cpu")[0]):
        yield


@pytest.fixture(autouse=True)
def _clean_cons_env(monkeypatch):
    # Arena/traversal defaults must not leak in from the developer shell.
    for name in _CONS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def arena():
    with Arena(ArenaConfig(initial_capacity=8)) as a:
        yield a


@pytest.fixture
def graph(arena):
    return ExprGraph(arena)
