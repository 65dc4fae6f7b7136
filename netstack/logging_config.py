"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Netstack, a product of Garudex Labs

Structured logging for Netstack.

Every module logs through ``get_logger(__name__)``. Applications call
``setup_logging`` once to choose level, destination and rendering (JSON
lines or a colored console). Events emitted while a request is running are
tagged with that request's id through a context variable, so one request can
be followed from dispatch to delivery.
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import structlog
from structlog.types import EventDict, Processor


_request_id: ContextVar[Optional[str]] = ContextVar("netstack_request_id", default=None)


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """structlog processor tagging events with the active request id."""
    request_id = _request_id.get()
    if request_id and "correlation_id" not in event_dict:
        event_dict["correlation_id"] = request_id
    return event_dict


def get_correlation_id() -> Optional[str]:
    """Return the request id bound to the current context, if any."""
    return _request_id.get()


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Bind a request id to the current context until cleared.

    Args:
        correlation_id: Id to bind. A random UUID4 is generated when omitted.

    Returns:
        The bound id
    """
    correlation_id = correlation_id or str(uuid.uuid4())
    _request_id.set(correlation_id)
    return correlation_id


def clear_correlation_id() -> None:
    _request_id.set(None)


@contextmanager
def request_context(correlation_id: Optional[str] = None) -> Iterator[str]:
    """
    Scope a request id to a block.

    An id already bound by the caller is reused, so requests issued inside
    an application-level correlation scope share its id. The previous value
    is restored on exit.

    Yields:
        The request id in effect inside the block
    """
    request_id = correlation_id or _request_id.get() or str(uuid.uuid4())
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)


def _build_handler(level: int, log_file: Optional[Path]) -> logging.Handler:
    if log_file is None:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)
    handler.setLevel(level)
    # structlog renders the full line
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = True,
) -> None:
    """
    Configure structured logging for Netstack.

    Replaces any handlers already attached to the root logger.

    Args:
        level: Log level name. Unknown names fall back to INFO.
        log_file: File to write to instead of stderr. Parent directories
            are created.
        json_format: Render JSON lines when True, a console format otherwise.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(
        _build_handler(numeric_level, Path(log_file) if log_file else None)
    )

    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=log_file is None),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a logger namespaced under ``netstack.``."""
    if not name.startswith("netstack"):
        name = f"netstack.{name}"
    return structlog.get_logger(name)


# Request lifecycle events

def _event(event_type: str, fields: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    payload = {"event_type": event_type}
    payload.update(fields)
    payload.update(extra)
    return payload


def log_request_dispatch(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    mocked: bool = False,
    **kwargs: Any,
) -> None:
    """
    Log a request leaving the pipeline (debug).

    Args:
        logger: Logger instance
        method: HTTP method
        url: Resolved URL, or the mock resource name for mocked calls
        mocked: Whether the payload comes from a mock source
        **kwargs: Extra context
    """
    logger.debug(
        "request_dispatch",
        **_event("request_dispatch", {"method": method, "url": url, "mocked": mocked}, kwargs),
    )


def log_request_completion(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    url: str,
    status_code: Optional[int],
    duration_ms: float,
    **kwargs: Any,
) -> None:
    """Log a finished transport round trip (info). ``status_code`` is omitted when unknown."""
    fields: Dict[str, Any] = {"method": method, "url": url, "duration_ms": duration_ms}
    if status_code is not None:
        fields["status_code"] = status_code
    logger.info("request_completion", **_event("request_completion", fields, kwargs))


def log_request_failure(
    logger: structlog.stdlib.BoundLogger,
    kind: str,
    reason: str,
    cause: Optional[BaseException] = None,
    **kwargs: Any,
) -> None:
    """
    Log a classified request failure (warning).

    Args:
        logger: Logger instance
        kind: ErrorKind value
        reason: Failure message
        cause: Underlying exception, rendered as ``"Type: message"``
        **kwargs: Extra context
    """
    fields: Dict[str, Any] = {"kind": kind, "reason": reason}
    if cause is not None:
        fields["cause"] = f"{type(cause).__name__}: {cause}"
    logger.warning("request_failure", **_event("request_failure", fields, kwargs))


def log_activity_transition(
    logger: structlog.stdlib.BoundLogger,
    active: bool,
    in_flight: int,
    **kwargs: Any,
) -> None:
    logger.debug(
        "activity_transition",
        **_event("activity_transition", {"active": active, "in_flight": in_flight}, kwargs),
    )
