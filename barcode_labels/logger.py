"""
Structured logging configuration using structlog.

Call sites pass context the stdlib way (`logger.info("msg", extra={...})`);
the payload is flattened into the event so JSON output stays one level deep.
"""

import logging
import sys
from typing import Any

import structlog
from barcode_labels.config import settings

SERVICE_NAME = "barcode-label-service"


def flatten_extra(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Merge an `extra` mapping into the event. Explicit event keys win."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    elif extra is not None:
        event_dict["extra"] = extra
    return event_dict


def add_service_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def configure_logging() -> None:
    """
    Configure structured logging for the service.

    Sets up:
    - Flattened `extra` payloads with service and environment stamped on every event
    - JSON formatting outside development, pretty console output in development
    - Standard library logging integration, with reportlab's font chatter capped at WARNING
    """
    level = getattr(logging, settings.log_level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level
    )
    logging.getLogger("reportlab").setLevel(max(level, logging.WARNING))

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        flatten_extra,
        add_service_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.is_development:
        renderers = [structlog.dev.ConsoleRenderer()]
    else:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ]

    structlog.configure(
        processors=shared_processors + renderers,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(request_id: str, path: str) -> None:
    """Attach request identifiers to every event logged while handling a request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=path)


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Labels exported", extra={"code_count": 20})
    """
    return structlog.get_logger(name)


configure_logging()
