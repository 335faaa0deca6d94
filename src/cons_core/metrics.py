import os

_metrics_allocs = 0
_metrics_mutations = 0
_metrics_grows = 0
_metrics_conflicts = 0


def _metrics_enabled():
    value = os.environ.get("CONS_ARENA_METRICS", "").strip().lower()
    return value in ("1", "true", "yes", "on")


def metrics_reset():
    global _metrics_allocs
    global _metrics_mutations
    global _metrics_grows
    global _metrics_conflicts
    _metrics_allocs = 0
    _metrics_mutations = 0
    _metrics_grows = 0
    _metrics_conflicts = 0


def _metrics_tick_alloc(n=1):
    if not _metrics_enabled():
        return
    global _metrics_allocs
    _metrics_allocs += int(n)


def _metrics_tick_mutation(n=1):
    if not _metrics_enabled():
        return
    global _metrics_mutations
    _metrics_mutations += int(n)


def _metrics_tick_grow():
    if not _metrics_enabled():
        return
    global _metrics_grows
    _metrics_grows += 1


def _metrics_tick_conflict():
    if not _metrics_enabled():
        return
    global _metrics_conflicts
    _metrics_conflicts += 1


def metrics_snapshot():
    return {
        "allocs": int(_metrics_allocs),
        "mutations": int(_metrics_mutations),
        "grows": int(_metrics_grows),
        "borrow_conflicts": int(_metrics_conflicts),
    }


__all__ = [
    "metrics_reset",
    "metrics_snapshot",
    "_metrics_enabled",
    "_metrics_tick_alloc",
    "_metrics_tick_mutation",
    "_metrics_tick_grow",
    "_metrics_tick_conflict",
]
