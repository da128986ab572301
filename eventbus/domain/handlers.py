"""Listener groups: subscriptions wired to a bus and removed together."""

from __future__ import annotations

from collections.abc import Iterable

from eventbus.domain.bus import EventBus
from eventbus.repos.memory import Listener


class ListenerGroup:
    """Wires a set of listeners to the bus and detaches them as a unit.

    Subclasses declare their subscriptions by overriding ``subscriptions()``;
    ad hoc pairs can be added with ``add()``. ``detach()`` unsubscribes the
    group's listeners one by one, so other listeners on the same names keep
    firing. A callable that was also subscribed outside the group is removed
    from that name entirely, since ``unsubscribe`` drops every occurrence.
    """

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        self.attached = False
        self._extra: list[tuple[str, Listener]] = []
        self._subscribed: list[tuple[str, Listener]] = []

    def subscriptions(self) -> Iterable[tuple[str, Listener]]:
        return ()

    def add(self, event_name: str, listener: Listener) -> None:
        """Register a pair with the group, subscribing it now if attached."""
        self._extra.append((event_name, listener))
        if self.attached:
            self._subscribe(event_name, listener)

    def attach(self) -> None:
        if self.attached:
            return
        for event_name, listener in [*self.subscriptions(), *self._extra]:
            self._subscribe(event_name, listener)
        self.attached = True

    def detach(self) -> None:
        for event_name, listener in self._subscribed:
            self.bus.unsubscribe(event_name, listener)
        self._subscribed.clear()
        self.attached = False

    def _subscribe(self, event_name: str, listener: Listener) -> None:
        self.bus.subscribe(event_name, listener)
        self._subscribed.append((event_name, listener))
