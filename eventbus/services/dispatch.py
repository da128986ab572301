"""Service for invoking a snapshot of listeners with an event payload."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Callable

from eventbus.domain.models import ErrorPolicy, ListenerFailure
from eventbus.repos.memory import Listener

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, Listener, Exception], None]


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", repr(listener))


def dispatch(
    event_name: str,
    data: Any,
    listeners: Iterable[Listener],
    policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
    on_error: ErrorCallback | None = None,
) -> list[ListenerFailure]:
    """Call each listener with *data*, in order.

    Under ``FAIL_FAST`` the first exception propagates unchanged and the rest
    of the listeners are skipped. Under ``CONTINUE`` each failure is logged,
    handed to *on_error* and recorded; the returned list holds those records.
    """
    failures: list[ListenerFailure] = []

    for listener in listeners:
        if policy == ErrorPolicy.FAIL_FAST:
            listener(data)
            continue

        try:
            listener(data)
        except Exception as exc:
            failures.append(
                ListenerFailure(
                    event_name=event_name,
                    listener_name=_listener_name(listener),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
            )
            logger.exception(
                "Listener %s failed for event: %s",
                _listener_name(listener),
                event_name,
            )
            if on_error is not None:
                try:
                    on_error(event_name, listener, exc)
                except Exception:
                    logger.warning("on_listener_error callback failed", exc_info=True)

    return failures
