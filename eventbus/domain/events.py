"""Event values carried through the bus."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from eventbus.domain.models import utcnow


class EventLike(Protocol):
    """Anything ``EventBus.publish`` can route: a name and a payload."""

    name: str
    data: Any


class DomainEvent(BaseModel):
    """A named payload stamped with its creation time.

    Records are frozen once built. Two events with the same name and data are
    still distinct records; nothing is deduplicated.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    data: Any = None
    created_at: datetime = Field(default_factory=utcnow)

    def __init__(self, name: str, data: Any = None, **kwargs: Any) -> None:
        super().__init__(name=name, data=data, **kwargs)
