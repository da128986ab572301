"""Exception hierarchy for the event bus."""

from __future__ import annotations


class EventBusError(RuntimeError):
    """Base class for all event bus errors."""


class InvalidEventError(EventBusError):
    """Raised when a published value does not expose an event name."""

    def __init__(self, event: object) -> None:
        self.event = event
        super().__init__(
            f"Cannot publish {type(event).__name__!r}: no event name found"
        )


class ConfigValidationError(EventBusError):
    """Raised when bus configuration cannot be parsed."""
