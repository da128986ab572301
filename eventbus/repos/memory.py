"""In-memory store of event listeners."""

from __future__ import annotations

from threading import RLock
from types import BuiltinMethodType, MethodType
from typing import Any, Callable

Listener = Callable[[Any], object]


def same_listener(registered: Listener, listener: Listener) -> bool:
    """Identity match; bound methods match on their instance and function."""
    if registered is listener:
        return True
    if isinstance(registered, MethodType) and isinstance(listener, MethodType):
        return (
            registered.__self__ is listener.__self__
            and registered.__func__ is listener.__func__
        )
    if isinstance(registered, BuiltinMethodType) and isinstance(
        listener, BuiltinMethodType
    ):
        return (
            registered.__self__ is listener.__self__
            and registered.__name__ == listener.__name__
        )
    return False


class ListenerRegistry:
    """Dict-backed store mapping event names to ordered listener lists.

    A name is present only while it has at least one listener. Every access
    goes through an ``RLock`` so a bus can be shared between threads.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._lock = RLock()

    def add(self, event_name: str, listener: Listener) -> None:
        with self._lock:
            self._listeners.setdefault(event_name, []).append(listener)

    def remove(self, event_name: str, listener: Listener) -> int:
        """Drop every occurrence of *listener* under *event_name*.

        Listeners match by identity. A bound method matches another bound
        method of the same function on the same instance, since each attribute
        access builds a new method object. Returns the number removed.
        """
        with self._lock:
            current = self._listeners.get(event_name)
            if current is None:
                return 0
            remaining = [
                registered
                for registered in current
                if not same_listener(registered, listener)
            ]
            removed = len(current) - len(remaining)
            if remaining:
                self._listeners[event_name] = remaining
            else:
                del self._listeners[event_name]
            return removed

    def remove_all(self, event_name: str) -> int:
        with self._lock:
            return len(self._listeners.pop(event_name, []))

    def clear(self) -> None:
        with self._lock:
            self._listeners.clear()

    def snapshot(self, event_name: str) -> list[Listener]:
        """Return a copy of the listeners for *event_name*, in registration order."""
        with self._lock:
            return list(self._listeners.get(event_name, []))

    def count(self, event_name: str) -> int:
        with self._lock:
            return len(self._listeners.get(event_name, []))

    def names(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._listeners)

    def __contains__(self, event_name: object) -> bool:
        with self._lock:
            return event_name in self._listeners
