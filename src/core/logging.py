from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

_CONFIGURED = False


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _service_stamp(service: str) -> Processor:
    def stamp(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return stamp


def setup_logging(level: int | str = logging.INFO, *, service: str | None = None) -> None:
    """Configure structlog to emit JSON logs with contextvars support.

    ``level`` may be a ``logging`` constant or a name such as ``"DEBUG"``;
    unknown names fall back to ``INFO``. When ``service`` is given every
    event carries it under the ``service`` key.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    numeric_level = _resolve_level(level)
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        stream=sys.stdout,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
    ]
    if service:
        processors.append(_service_stamp(service))
    processors += [
        structlog.processors.dict_tracebacks,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True
