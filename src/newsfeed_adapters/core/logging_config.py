"""Logging setup shared by the HTTP app and the CLI.

Modules keep using ``logging.getLogger(__name__)`` with ``%``-style messages
(``"reuters: ..."``, ``"fetch: ..."``).  Their records, and anything logged
through ``structlog.get_logger``, pass through one processor chain:

* values bound with ``structlog.contextvars`` (the request middleware binds
  ``request_id``, ``method`` and ``path``),
* ``extra={...}`` fields of stdlib records,
* a ``source`` field naming the adapter for loggers under
  ``newsfeed_adapters.sources``,
* redaction of credential-bearing HTTP headers,

and are rendered as one JSON object per line, or as coloured console output
at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

REDACTED = "[REDACTED]"

#: Header names (lower-case) whose values never reach the log output.
SENSITIVE_HEADERS: frozenset[str] = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}
)

_SOURCES_PREFIX = "newsfeed_adapters.sources."

# Loggers that are chatty at INFO: one line per request.
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _redact_headers(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Mask sensitive headers, both as top-level keys and inside header mappings."""
    for key, value in list(event_dict.items()):
        if key.lower().replace("_", "-") in SENSITIVE_HEADERS:
            event_dict[key] = REDACTED
        elif isinstance(value, Mapping) and key.endswith("headers"):
            event_dict[key] = {
                name: REDACTED if str(name).lower() in SENSITIVE_HEADERS else header_value
                for name, header_value in value.items()
            }
    return event_dict


def _add_source(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Tag records from ``newsfeed_adapters.sources.<name>`` with ``source=<name>``."""
    name = event_dict.get("logger") or ""
    if "source" not in event_dict and name.startswith(_SOURCES_PREFIX):
        event_dict["source"] = name[len(_SOURCES_PREFIX):].split(".", 1)[0]
    return event_dict


def _renderer(debug: bool) -> Processor:
    if debug:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def configure_logging(log_level: str = "INFO", stream: TextIO | None = None) -> None:
    """Install the processor chain on the root logger.

    Safe to call repeatedly; the root handler is replaced each time.

    Args:
        log_level: Level name, case-insensitive.  ``"DEBUG"`` also switches
            to console rendering and leaves the HTTP client loggers verbose.
        stream: Where log lines go.  Defaults to ``sys.stdout``; the CLI
            passes ``sys.stderr`` so stdout carries only the feed.
    """
    level_name = log_level.upper()
    debug = level_name == "DEBUG"

    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_source,
        _redact_headers,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *pre_chain],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(debug),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))

    quiet_level = logging.NOTSET if debug else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
