"""Handle References — tests for weak/strong non-owning references."""

import gc

from netbridge.core.handle_refs import HandleRef, live_handles


class _Handle:
    pass


class _Slotted:
    __slots__ = ("x",)


def test_weak_ref_used_when_supported():
    h = _Handle()
    ref = HandleRef(h)
    assert ref.is_weak
    assert ref.get() is h


def test_strong_ref_when_weak_disabled():
    h = _Handle()
    ref = HandleRef(h, weak=False)
    assert not ref.is_weak
    assert ref.get() is h


def test_falls_back_to_strong_for_unweakrefable_handles():
    h = _Slotted()
    ref = HandleRef(h)
    assert not ref.is_weak
    assert ref.get() is h


def test_collected_handle_resolves_to_none():
    h = _Handle()
    ref = HandleRef(h)
    del h
    gc.collect()
    assert ref.get() is None
    assert not ref.alive


def test_strong_ref_keeps_handle_alive():
    ref = HandleRef(_Handle(), weak=False)
    gc.collect()
    assert ref.alive


def test_refers_to_uses_identity_not_equality():
    class Eq:
        def __eq__(self, other):
            return True
        __hash__ = object.__hash__

    a, b = Eq(), Eq()
    ref = HandleRef(a)
    assert ref.refers_to(a)
    assert not ref.refers_to(b)


def test_refers_to_none_is_false_for_dead_ref():
    h = _Handle()
    ref = HandleRef(h)
    del h
    gc.collect()
    assert not ref.refers_to(None)


def test_live_handles_skips_collected_and_keeps_order():
    a, b, c = _Handle(), _Handle(), _Handle()
    refs = [HandleRef(a), HandleRef(b), HandleRef(c)]
    del b
    gc.collect()
    assert live_handles(refs) == [a, c]


def test_live_handles_returns_fresh_list():
    a = _Handle()
    refs = [HandleRef(a)]
    result = live_handles(refs)
    result.clear()
    assert live_handles(refs) == [a]
