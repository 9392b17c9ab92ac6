"""Tests for the identity-keyed handler registry."""

from __future__ import annotations

import pytest

from ctxsignal import HandlerRegistry, handler_key


class Owner:
    def handle(self, data: object) -> None:
        pass


def plain(data: object) -> None:
    pass


@pytest.fixture
def registry() -> HandlerRegistry[object]:
    return HandlerRegistry()


def test_handler_key_for_bound_method():
    """Test bound methods accessed twice share a key."""
    owner = Owner()
    assert owner.handle is not owner.handle
    assert handler_key(owner.handle) == handler_key(owner.handle)
    assert handler_key(owner.handle) != handler_key(Owner().handle)


def test_handler_key_for_function():
    """Test plain functions are keyed by identity."""
    assert handler_key(plain) == id(plain)


def test_add_reports_insertion(registry: HandlerRegistry[object]):
    """Test add returns False for an existing pair."""
    ctx = object()
    assert registry.add(plain, ctx)
    assert not registry.add(plain, ctx)
    assert registry.count_for(ctx) == 1


def test_remove_last_handler_drops_entry(registry: HandlerRegistry[object]):
    """Test the context entry disappears with its last handler."""
    ctx = Owner()
    registry.add(plain, ctx)
    registry.add(ctx.handle, ctx)

    assert registry.remove(plain, ctx)
    assert registry.has_context(ctx)
    assert registry.remove(ctx.handle, ctx)
    assert not registry.has_context(ctx)
    assert len(registry) == 0
    assert not registry.remove(plain, ctx)


def test_discard_context(registry: HandlerRegistry[object]):
    """Test discarding a context reports whether it existed."""
    ctx = object()
    registry.add(plain, ctx)

    assert registry.discard_context(ctx)
    assert not registry.discard_context(ctx)


def test_snapshot_is_detached(registry: HandlerRegistry[object]):
    """Test the snapshot keeps order and ignores later mutation."""
    first, second = Owner(), Owner()
    registry.add(first.handle, first)
    registry.add(plain, first)
    registry.add(second.handle, second)

    snapshot = registry.snapshot()
    registry.clear()

    assert [ctx for ctx, _ in snapshot] == [first, second]
    assert snapshot[0][1] == (first.handle, plain)
    assert registry.handler_count() == 0


def test_contexts_in_registration_order(registry: HandlerRegistry[object]):
    """Test context iteration follows first registration."""
    a, b = object(), object()
    registry.add(plain, b)
    registry.add(plain, a)
    registry.add(Owner().handle, b)

    assert list(registry.contexts()) == [b, a]
    assert registry.handler_count() == 3  # noqa: PLR2004
    assert repr(registry) == "HandlerRegistry(contexts=2, handlers=3)"


def test_handler_key_for_builtin_bound_method():
    """Test builtin bound methods accessed twice share a key."""
    received: list[object] = []
    other: list[object] = []

    assert received.append is not received.append
    assert handler_key(received.append) == handler_key(received.append)
    assert handler_key(received.append) != handler_key(other.append)
    assert handler_key(received.append) != handler_key(received.extend)
    assert handler_key(len) == id(len)


def test_builtin_bound_method_is_deduplicated(registry: HandlerRegistry[object]):
    """Test re-adding and removing a builtin bound method finds the entry."""
    received: list[object] = []
    ctx = object()

    assert registry.add(received.append, ctx)
    assert not registry.add(received.append, ctx)
    assert registry.count_for(ctx) == 1
    assert registry.contains(received.append, ctx)

    assert registry.remove(received.append, ctx)
    assert not registry.has_context(ctx)
