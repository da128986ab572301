"""Name-keyed publish/subscribe bus with synchronous, ordered dispatch."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from threading import Lock
from typing import Any

from eventbus.domain.errors import InvalidEventError
from eventbus.domain.events import EventLike
from eventbus.domain.models import BusConfig, ListenerFailure
from eventbus.repos.memory import Listener, ListenerRegistry
from eventbus.services.dispatch import ErrorCallback, dispatch

logger = logging.getLogger(__name__)


def _unpack(event: Any) -> tuple[str, Any]:
    """Pull ``(name, data)`` out of an event object or a plain mapping."""
    if isinstance(event, Mapping):
        name = event.get("name")
        data = event.get("data")
    else:
        name = getattr(event, "name", None)
        data = getattr(event, "data", None)
    if not isinstance(name, str):
        raise InvalidEventError(event)
    return name, data


class EventBus:
    """Publish/subscribe bus keyed by event name.

    Listeners are called synchronously in registration order with the event's
    data payload only. Each publish iterates a snapshot of the listener list,
    so listeners that subscribe or unsubscribe mid-dispatch only change what
    later publishes see.
    """

    def __init__(
        self,
        config: BusConfig | None = None,
        on_listener_error: ErrorCallback | None = None,
    ) -> None:
        self.config = config or BusConfig()
        self._registry = ListenerRegistry()
        self._on_listener_error = on_listener_error
        self._failures: deque[ListenerFailure] = deque(
            maxlen=self.config.max_failures
        )
        self._failures_lock = Lock()

    def subscribe(self, event_name: str, listener: Listener) -> None:
        self._registry.add(event_name, listener)
        logger.debug("Subscribed to event: %s", event_name)

    def unsubscribe(self, event_name: str, listener: Listener | None = None) -> None:
        """Remove *listener* from *event_name*, or every listener if omitted.

        Unknown names and listeners are ignored.
        """
        if listener is None:
            removed = self._registry.remove_all(event_name)
        else:
            removed = self._registry.remove(event_name, listener)
        if removed:
            logger.debug(
                "Unsubscribed %d listener(s) from event: %s", removed, event_name
            )

    def publish(self, event: EventLike | Mapping[str, Any]) -> None:
        name, data = _unpack(event)
        listeners = self._registry.snapshot(name)

        if not listeners:
            level = logging.WARNING if self.config.warn_on_unmatched else logging.DEBUG
            logger.log(level, "No listeners for event: %s", name)
            return

        failures = dispatch(
            name,
            data,
            listeners,
            policy=self.config.error_policy,
            on_error=self._on_listener_error,
        )
        if failures:
            with self._failures_lock:
                self._failures.extend(failures)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def has_subscribers(self, event_name: str) -> bool:
        return event_name in self._registry

    def subscriber_count(self, event_name: str) -> int:
        return self._registry.count(event_name)

    def event_names(self) -> frozenset[str]:
        return self._registry.names()

    def clear(self) -> None:
        """Drop every subscription for every event name."""
        self._registry.clear()

    @property
    def failures(self) -> list[ListenerFailure]:
        """Most recent listener failures under the continue policy (a copy).

        At most ``config.max_failures`` records are kept; older ones drop off.
        """
        with self._failures_lock:
            return list(self._failures)

    def clear_failures(self) -> list[ListenerFailure]:
        """Drain the recorded failures and return them."""
        with self._failures_lock:
            drained = list(self._failures)
            self._failures.clear()
        return drained
