import pytest

from cons_core import domains as d
from cons_core.errors import NotAnAtomError, NotAPairError
from cons_graph import access, construct, printer
from tests import harness


def test_shared_tail_scenario(arena):
    s = harness.shared_tail_scenario(arena)
    assert printer.render(arena, s.a) == "(5 . nil)"
    assert printer.render(arena, s.b) == "(6 . (5 . nil))"
    assert printer.render(arena, s.c) == "(10 . (5 . nil))"

    # Overwrite an atom that a is built on.
    access.set_value(arena, s.v1, 15)
    assert printer.render(arena, s.a) == "(15 . nil)"
    assert printer.render(arena, s.b) == "(6 . (15 . nil))"
    assert printer.render(arena, s.c) == "(10 . (15 . nil))"

    # Replace a's whole node with a fresh pair.
    w1 = construct.atom(arena, 42)
    w2 = construct.atom(arena, 43)
    access.replace(arena, s.a, d.Pair(w1, w2))
    assert printer.render(arena, s.a) == "(42 . 43)"
    assert printer.render(arena, s.b) == "(6 . (42 . 43))"
    assert printer.render(arena, s.c) == "(10 . (42 . 43))"

    # Point a's first at an atom already in the arena.
    x1 = construct.atom(arena, 9)
    access.set_first(arena, s.a, x1)
    assert printer.render(arena, s.a) == "(9 . 43)"
    assert printer.render(arena, s.b) == "(6 . (9 . 43))"
    assert printer.render(arena, s.c) == "(10 . (9 . 43))"


def test_set_first_visible_through_every_alias(arena):
    x = construct.atom(arena, 1)
    y = construct.atom(arena, 2)
    z = construct.atom(arena, 3)
    p = construct.cons(arena, x, y)
    stored = {"h1": p, "h2": p}
    access.set_first(arena, stored["h1"], z)
    assert access.first_of(arena, stored["h2"]) == z
    assert access.second_of(arena, stored["h2"]) == y


def test_set_second_visible_through_every_alias(arena):
    x = construct.atom(arena, 1)
    p = construct.cons(arena, x, arena.nil)
    q = construct.cons(arena, p, p)
    tail = construct.atom(arena, 7)
    access.set_second(arena, p, tail)
    assert access.second_of(arena, access.first_of(arena, q)) == tail
    assert printer.render(arena, q) == "((1 . 7) . (1 . 7))"


def test_shared_substructure_sees_atom_mutation(arena):
    s = harness.shared_tail_scenario(arena)
    access.set_value(arena, s.v1, -3)
    via_b = access.first_of(arena, access.second_of(arena, s.b))
    via_c = access.first_of(arena, access.second_of(arena, s.c))
    assert via_b == via_c == s.v1
    assert access.value_of(arena, via_b) == -3


def test_atom_to_pair_variant_replacement(arena):
    h = construct.atom(arena, 5)
    p = construct.cons(arena, h, arena.nil)
    with pytest.raises(NotAPairError):
        access.first_of(arena, h)
    access.replace(arena, h, d.Pair(arena.nil, arena.nil))
    assert access.is_pair(arena, h)
    assert access.first_of(arena, h) == arena.nil
    with pytest.raises(NotAnAtomError):
        access.value_of(arena, h)
    with pytest.raises(NotAnAtomError):
        access.set_value(arena, h, 1)
    assert printer.render(arena, p) == "((nil . nil) . nil)"


def test_pair_to_atom_variant_replacement(arena):
    p = construct.cons(arena, construct.atom(arena, 1), arena.nil)
    access.replace(arena, p, "sym")
    assert access.is_atom(arena, p)
    assert access.value_of(arena, p) == "sym"
    with pytest.raises(NotAPairError):
        access.second_of(arena, p)
    with pytest.raises(NotAPairError):
        access.set_first(arena, p, arena.nil)
    with pytest.raises(NotAPairError):
        access.set_second(arena, p, arena.nil)


def test_set_value_can_switch_int_and_symbol(arena):
    h = construct.atom(arena, 1)
    access.set_value(arena, h, "one")
    assert access.value_of(arena, h) == "one"
    access.set_value(arena, h, d.INT64_MIN)
    assert access.value_of(arena, h) == d.INT64_MIN


def test_self_referencing_pair_is_legal(arena):
    p = construct.cons(arena, arena.nil, arena.nil)
    access.set_second(arena, p, p)
    assert access.second_of(arena, p) == p
    assert access.second_of(arena, access.second_of(arena, p)) == p


def test_errors_name_the_operation(arena):
    h = construct.atom(arena, 1)
    with pytest.raises(NotAPairError) as info:
        access.second_of(arena, h)
    assert info.value.slot == h.slot
    assert "second_of" in str(info.value)
    assert isinstance(info.value, TypeError)


def test_is_nil(arena):
    assert access.is_nil(arena, arena.nil)
    assert access.is_nil(arena, construct.atom(arena, "nil"))
    assert not access.is_nil(arena, construct.atom(arena, 0))
    assert not access.is_nil(arena, construct.cons(arena, arena.nil, arena.nil))
