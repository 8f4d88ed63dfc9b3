"""Structured JSON logging for applications embedding :mod:`ledger_auth`.

Library modules only emit records through module loggers; nothing here runs
unless an application opts in via :func:`configure_structured_logging`.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from queue import Full, Queue
from typing import Iterable
from uuid import uuid4

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from .settings import get_settings

__all__ = [
    "REDACTED",
    "JsonFormatter",
    "BoundedQueueHandler",
    "configure_structured_logging",
    "shutdown_listeners",
]

LOGGER = logging.getLogger(__name__)

# Attributes every LogRecord carries; anything else came from ``extra``.
_RESERVED_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}

# Context keys whose values must never reach a log sink.
_REDACTED_KEYS: frozenset[str] = frozenset(
    {"signature", "private_key", "seed", "signing_seed"}
)
REDACTED = "[REDACTED]"


def _render_context_value(key: str, value: object) -> object:
    if key in _REDACTED_KEYS or isinstance(value, Ed25519PrivateKey):
        return REDACTED
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return value


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line.

    Signatures and private key material passed through ``extra`` are replaced
    with ``[REDACTED]``; other raw bytes are rendered as hex.
    """

    def __init__(self, *, default_trace_id: str | None = None) -> None:
        super().__init__()
        self._default_trace_id = default_trace_id

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        context = {
            key: _render_context_value(key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS and key != "trace_id"
        }
        payload: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "trace_id": getattr(record, "trace_id", None) or self._default_trace_id,
            "context": context,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class BoundedQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that drops records instead of blocking when full."""

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except Full:
            return


def configure_structured_logging(
    logger: logging.Logger | None = None,
    *,
    trace_id: str | None = None,
    level: int | None = None,
) -> logging.handlers.QueueListener:
    """Attach a JSON stream handler, fed through a bounded queue, to ``logger``.

    Args:
        logger: Target logger. Defaults to the ``ledger_auth`` package logger.
        trace_id: Identifier stamped on records that do not carry their own.
            A random UUID is used when omitted.
        level: Logging level. Defaults to ``LEDGER_AUTH_LOG_LEVEL``.

    Returns:
        The started queue listener; stop it with :func:`shutdown_listeners`.
    """

    logger = logger or logging.getLogger("ledger_auth")
    logger.setLevel(level if level is not None else get_settings().log_level_number)

    record_queue: Queue[logging.LogRecord] = Queue(maxsize=1024)
    logger.addHandler(BoundedQueueHandler(record_queue))

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(JsonFormatter(default_trace_id=trace_id or str(uuid4())))

    listener = logging.handlers.QueueListener(record_queue, stream_handler)
    listener.start()
    return listener


def shutdown_listeners(listeners: Iterable[logging.handlers.QueueListener]) -> None:
    """Stop all queue listeners, logging rather than raising on failure."""

    for listener in listeners:
        try:
            listener.stop()
        except Exception as exc:  # pragma: no cover - cleanup path
            LOGGER.warning("Failed to stop logging listener", exc_info=exc)
