"""
Logging setup for the Bookshelf API.

Events are emitted through structlog on top of stdlib logging and rendered as
JSON, or as coloured console lines in debug mode. Request-scoped fields live in
structlog's context variables: the middleware binds a request id when a request
arrives, the auth resolvers bind the user id once a user is known, and every
event logged while the request is served carries both.
"""

import base64
import logging
import secrets
import sys
import time
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, get_contextvars


def resolve_log_level(level: str | int) -> int:
    """Turn a level name such as ``"warning"`` (any case) or a number into a stdlib level.

    Raises:
        ValueError: If the name is not a stdlib level name
    """
    if isinstance(level, int):
        return level

    levels = logging.getLevelNamesMapping()
    try:
        return levels[level.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None


def configure_logging(level: str | int = "INFO", debug: bool = False) -> None:
    """Configure stdlib logging and structlog for the service.

    Args:
        level: Minimum level to emit, e.g. ``settings.log_level``
        debug: Render human-readable console output instead of JSON
    """
    log_level = resolve_log_level(level)

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Return a 14-character urlsafe id: microsecond timestamp plus two random bytes."""
    timestamp_us = int(time.time() * 1_000_000)
    raw = timestamp_us.to_bytes(8, byteorder="big") + secrets.token_bytes(2)
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def bind_request_context(request_id: str | None = None) -> str:
    """Start a fresh log context for an incoming request.

    Anything bound by a previous request on the same context is dropped.

    Args:
        request_id: Id supplied by the caller (a new one is generated if None)

    Returns:
        The request id now attached to log events
    """
    clear_contextvars()
    request_id = request_id or generate_request_id()
    bind_contextvars(request_id=request_id)
    return request_id


def bind_user_context(user_id: Any) -> None:
    """Attach the authenticated user's id to the current request's log events."""
    bind_contextvars(user_id=str(user_id))


def clear_request_context() -> None:
    clear_contextvars()


def get_request_context() -> dict[str, Any]:
    """Fields currently added to every log event (``request_id``, ``user_id``)."""
    return get_contextvars()
