"""Structured logging configuration using structlog.

Provides correlation IDs for tracing a single edit session through the
crop pipeline and configurable output formats (JSON for production,
colored console for dev).
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, cast

import structlog
from structlog.types import Processor

from faceblur.config import settings

# Context variables for correlation IDs
_session_id: ContextVar[str | None] = ContextVar("session_id", default=None)
_image_uri: ContextVar[str | None] = ContextVar("image_uri", default=None)
_face_index: ContextVar[int | None] = ContextVar("face_index", default=None)


@contextmanager
def correlation_context(
    session_id: str | None = None,
    image_uri: str | None = None,
    face_index: int | None = None,
) -> Iterator[None]:
    """Attach correlation IDs to log events emitted inside the block.

    Only the IDs passed are changed; on exit each one is restored to the
    value it had before, so nested scopes (a session around its faces)
    compose.

    Args:
        session_id: Identifier of the edit session
        image_uri: Source image being processed
        face_index: Position of the face currently being cropped
    """
    tokens: list[tuple[ContextVar[Any], Token[Any]]] = []
    if session_id is not None:
        tokens.append((_session_id, _session_id.set(session_id)))
    if image_uri is not None:
        tokens.append((_image_uri, _image_uri.set(image_uri)))
    if face_index is not None:
        tokens.append((_face_index, _face_index.set(face_index)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def clear_correlation_context() -> None:
    """Clear all correlation context variables."""
    _session_id.set(None)
    _image_uri.set(None)
    _face_index.set(None)


def _add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to add correlation IDs to log events."""
    _ = logger, method_name  # Required by structlog processor signature
    session_id = _session_id.get()
    image_uri = _image_uri.get()
    face_index = _face_index.get()

    if session_id is not None:
        event_dict["session_id"] = session_id
    if image_uri is not None:
        event_dict["image_uri"] = image_uri
    if face_index is not None:
        event_dict["face_index"] = face_index

    return event_dict


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure structlog with the specified settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_correlation_ids,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match; replaces handlers from earlier calls
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
