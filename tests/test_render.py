import itertools

import pytest

from cons_arena import Arena
from cons_core.config import ArenaConfig, TraverseConfig
from cons_core.errors import CycleError, DanglingError
from cons_graph import access, construct, printer

GUARDED = TraverseConfig(cycle_guard=True)


def test_render_atoms(arena):
    assert printer.render(arena, construct.atom(arena, 0)) == "0"
    assert printer.render(arena, construct.atom(arena, -42)) == "-42"
    assert printer.render(arena, construct.atom(arena, "foo")) == "foo"
    assert printer.render(arena, arena.nil) == "nil"


def test_render_dotted_pairs(arena):
    p = construct.cons(arena, construct.atom(arena, 1), construct.atom(arena, 2))
    assert printer.render(arena, p) == "(1 . 2)"
    q = construct.cons(arena, p, p)
    assert printer.render(arena, q) == "((1 . 2) . (1 . 2))"


@pytest.mark.parametrize("n", [1, 2, 5])
def test_render_proper_list_shape(arena, n):
    chain = construct.build(arena, list(range(1, n + 1)))
    expected = "nil"
    for value in reversed(range(1, n + 1)):
        expected = f"({value} . {expected})"
    assert printer.render(arena, chain) == expected


def test_render_deep_chain_without_recursion_limit():
    depth = 1500
    with Arena(ArenaConfig(initial_capacity=2 * depth + 8)) as arena:
        x = construct.atom(arena, 7)
        tail = arena.nil
        for _ in range(depth):
            tail = construct.cons(arena, x, tail)
        text = printer.render(arena, tail)
        assert text.startswith("(7 . (7 . ")
        assert text.endswith("nil" + ")" * depth)
        assert printer.render_list(arena, tail) == "(" + " ".join(["7"] * depth) + ")"


def test_render_list_forms(arena):
    assert printer.render_list(arena, construct.build(arena, [1, 2, 3])) == "(1 2 3)"
    improper = construct.cons(arena, construct.atom(arena, 1), construct.cons(arena, construct.atom(arena, 2), construct.atom(arena, 3)))
    assert printer.render_list(arena, improper) == "(1 2 . 3)"
    nested = construct.build(arena, ["ldc", ["quote", "a"]])
    assert printer.render_list(arena, nested) == "(ldc (quote a))"
    assert printer.render_list(arena, arena.nil) == "nil"
    assert printer.render_list(arena, construct.build(arena, [[]])) == "(nil)"


def test_render_reflects_mutation(arena):
    x = construct.atom(arena, 1)
    p = construct.cons(arena, x, arena.nil)
    before = printer.render(arena, p)
    access.set_value(arena, x, 2)
    assert before == "(1 . nil)"
    assert printer.render(arena, p) == "(2 . nil)"


def test_render_releases_borrows(arena):
    p = construct.build(arena, [1, [2, 3]])
    printer.render(arena, p)
    printer.render_list(arena, p)
    assert arena.borrows.active() == 0


def test_render_dangling_raises(arena):
    p = construct.build(arena, [1])
    arena.reset()
    with pytest.raises(DanglingError):
        printer.render(arena, p)


def test_render_cycle_guard_through_first(arena):
    p = construct.cons(arena, arena.nil, arena.nil)
    access.set_first(arena, p, p)
    with pytest.raises(CycleError):
        printer.render(arena, p, config=GUARDED)
    with pytest.raises(CycleError):
        printer.render_list(arena, p, config=GUARDED)


def test_render_cycle_guard_through_second(arena):
    p = construct.build(arena, [1, 2])
    access.set_second(arena, access.second_of(arena, p), p)
    with pytest.raises(CycleError):
        printer.render(arena, p, config=GUARDED)
    with pytest.raises(CycleError):
        printer.render_list(arena, p, config=GUARDED)


def test_render_cycle_guard_allows_sharing(arena):
    shared = construct.build(arena, [1])
    p = construct.cons(arena, shared, shared)
    assert printer.render(arena, p, config=GUARDED) == "((1 . nil) . (1 . nil))"
    assert printer.render_list(arena, p, config=GUARDED) == "((1) 1)"


def test_render_unguarded_cycle_does_not_terminate_early(arena):
    # Bounded probe: the walk keeps resolving the cycle instead of stopping.
    p = construct.cons(arena, construct.atom(arena, 1), arena.nil)
    access.set_second(arena, p, p)
    calls = itertools.count()
    original = arena.resolve

    def counting_resolve(h):
        if next(calls) > 200:
            raise RuntimeError("still walking")
        return original(h)

    arena.resolve = counting_resolve
    try:
        with pytest.raises(RuntimeError, match="still walking"):
            printer.render(arena, p)
    finally:
        del arena.resolve
