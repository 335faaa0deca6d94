"""Package loggers. The library installs no handlers; embedders configure them."""

import logging

ARENA_LOG = logging.getLogger("cons_arena")
GRAPH_LOG = logging.getLogger("cons_graph")

__all__ = ["ARENA_LOG", "GRAPH_LOG"]
