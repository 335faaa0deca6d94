from cons_core import domains as _domains
from cons_core import errors as _errors
from cons_core.config import (
    ArenaConfig,
    TraverseConfig,
    DEFAULT_ARENA_CONFIG,
    DEFAULT_TRAVERSE_CONFIG,
    arena_config_from_env,
    traverse_config_from_env,
)
from cons_core.domains import *
from cons_core.errors import *

__all__ = [
    "ArenaConfig",
    "TraverseConfig",
    "DEFAULT_ARENA_CONFIG",
    "DEFAULT_TRAVERSE_CONFIG",
    "arena_config_from_env",
    "traverse_config_from_env",
]
__all__ += _domains.__all__
__all__ += _errors.__all__
