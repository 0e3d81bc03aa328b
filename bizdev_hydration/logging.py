"""structlog configuration for the hydration service.

Recipient addresses are masked before rendering.  Use
:func:`hydration_log_context` around a hydration so store lookups log the
contact and tenant ids too.
"""

from __future__ import annotations

import logging
import re
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog

from .models import ResolutionContext

SERVICE_NAME = "bizdev-hydration"

# Chatty at INFO; only let them through when the service runs at DEBUG
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")

_RECIPIENT_KEYS = frozenset({"email", "contact_email", "to", "to_header"})
_LOCAL_PART_RE = re.compile(r"([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@")


def mask_email(value: str) -> str:
    """``jane@x.com`` -> ``j***@x.com``, also inside ``Name <addr>`` headers."""
    return _LOCAL_PART_RE.sub(r"\1***@", value)


def redact_recipients(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    for key in _RECIPIENT_KEYS & event_dict.keys():
        value = event_dict[key]
        if isinstance(value, str):
            event_dict[key] = mask_email(value)
    return event_dict


def add_service_name(
    logger: Any, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def hydration_log_context(
    context: ResolutionContext, **extra: Any
) -> AbstractContextManager[None]:
    """Bind the context's contact, tenant and owner ids for the ``with`` block."""
    fields = {
        "contact_id": context.contact_id,
        "tenant_id": context.tenant_id,
        "owner_id": context.owner_id,
        **extra,
    }
    return structlog.contextvars.bound_contextvars(
        **{key: value for key, value in fields.items() if value is not None}
    )


def setup_logging(*, json: bool = True, level: str = "INFO") -> None:
    """Configure structlog and the stdlib root logger.

    *json* selects JSON lines (production) over the console renderer.
    """
    level = level.upper()
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_name,
        redact_recipients,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Records from uvicorn and SQLAlchemy go through the same chain
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    quiet_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
