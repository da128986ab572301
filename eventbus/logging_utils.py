"""Logging bootstrap for applications embedding the event bus."""

from __future__ import annotations

import logging
from typing import Any

import structlog

_handler: logging.Handler | None = None


def _json_formatter() -> logging.Formatter:
    # Modules log through logging.getLogger(__name__); structlog renders them.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(
            ensure_ascii=False, separators=(",", ":")
        ),
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ],
    )


def configure_logging(logging_config: dict[str, Any] | None = None) -> logging.Handler:
    """Attach a stderr handler to the ``eventbus`` logger and return it.

    Recognised keys: ``level`` (default ``"INFO"``) and ``structured``
    (default ``False``; JSON lines rendered by structlog when true). Calling
    again replaces the handler installed by the previous call.
    """
    global _handler

    logging_config = logging_config or {}
    level_name = str(logging_config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    structured = bool(logging_config.get("structured", False))

    formatter: logging.Formatter
    if structured:
        formatter = _json_formatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    package_logger = logging.getLogger("eventbus")
    package_logger.setLevel(level)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(formatter)
    _handler.setLevel(level)
    package_logger.addHandler(_handler)
    return _handler
