"""Configuration and bookkeeping models for the event bus."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from eventbus.domain.errors import ConfigValidationError

ENV_PREFIX = "EVENTBUS_"
DEFAULT_MAX_FAILURES = 100


class ErrorPolicy(StrEnum):
    FAIL_FAST = "fail_fast"
    CONTINUE = "continue"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BusConfig(BaseSettings):
    """Dispatch behaviour of an ``EventBus``.

    Unset fields are read from ``EVENTBUS_*`` environment variables, e.g.
    ``EVENTBUS_ERROR_POLICY=continue``.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True)

    error_policy: ErrorPolicy = ErrorPolicy.FAIL_FAST
    warn_on_unmatched: bool = True
    max_failures: int = Field(default=DEFAULT_MAX_FAILURES, ge=0)

    @field_validator("error_policy", mode="before")
    @classmethod
    def _normalise_policy(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BusConfig:
        """Build a config from the process environment or from *environ*.

        Keys of *environ* take precedence over the process environment.
        Raises ``ConfigValidationError`` for values that cannot be parsed.
        """
        overrides: dict[str, Any] = {}
        for key, value in (environ or {}).items():
            if not key.upper().startswith(ENV_PREFIX):
                continue
            field = key[len(ENV_PREFIX):].lower()
            if field in cls.model_fields:
                overrides[field] = value
        try:
            return cls(**overrides)
        except ValidationError as exc:
            raise ConfigValidationError(str(exc)) from exc


class ListenerFailure(BaseModel):
    """Record of a listener that raised while the bus kept dispatching."""

    event_name: str
    listener_name: str
    error: str
    error_type: str
    timestamp: datetime = Field(default_factory=utcnow)
