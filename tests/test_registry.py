"""Tests for the in-memory listener registry."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from eventbus.repos.memory import ListenerRegistry, same_listener


def _a(data) -> None:
    pass


def _b(data) -> None:
    pass


def test_add_and_snapshot_preserve_order():
    registry = ListenerRegistry()
    registry.add("x", _a)
    registry.add("x", _b)

    assert registry.snapshot("x") == [_a, _b]
    assert registry.snapshot("missing") == []


def test_snapshot_is_a_copy():
    registry = ListenerRegistry()
    registry.add("x", _a)

    registry.snapshot("x").append(_b)

    assert registry.count("x") == 1


def test_remove_reports_count_and_drops_empty_name():
    registry = ListenerRegistry()
    registry.add("x", _a)
    registry.add("x", _a)

    assert registry.remove("x", _a) == 2
    assert "x" not in registry
    assert registry.remove("x", _a) == 0


def test_remove_all():
    registry = ListenerRegistry()
    registry.add("x", _a)
    registry.add("x", _b)
    registry.add("y", _a)

    assert registry.remove_all("x") == 2
    assert registry.remove_all("x") == 0
    assert registry.names() == frozenset({"y"})


def test_concurrent_adds_are_not_lost():
    registry = ListenerRegistry()

    def worker() -> None:
        for _ in range(500):
            registry.add("x", _a)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert registry.count("x") == 2000


@dataclass
class Handler:
    label: str

    def __call__(self, data) -> None:
        pass


def test_remove_matches_by_reference_not_equality():
    """Equal but distinct callables are separate subscriptions."""
    registry = ListenerRegistry()
    first = Handler("audit")
    second = Handler("audit")
    registry.add("x", first)
    registry.add("x", second)

    assert registry.remove("x", first) == 1
    assert registry.snapshot("x") == [second]
    assert registry.snapshot("x")[0] is second


def test_bound_methods_match_on_instance_and_function():
    class Service:
        def on_event(self, data) -> None:
            pass

        def on_other(self, data) -> None:
            pass

    one, two = Service(), Service()
    assert same_listener(one.on_event, one.on_event)
    assert not same_listener(one.on_event, two.on_event)
    assert not same_listener(one.on_event, one.on_other)


def test_builtin_bound_methods_match_on_owner():
    first: list = []
    second: list = []

    assert same_listener(first.append, first.append)
    assert not same_listener(first.append, second.append)
