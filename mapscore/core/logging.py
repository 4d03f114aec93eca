from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, MutableMapping
from uuid import uuid4


_CORRELATION_ID: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_SERVICE_NAME = "mapscore"


class JsonFormatter(logging.Formatter):
    """Render each log record as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": _SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        correlation_id = _CORRELATION_ID.get()
        if correlation_id:
            payload["correlation_id"] = correlation_id
        structured = getattr(record, "structured_data", None)
        if isinstance(structured, Mapping):
            payload.update(structured)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class StructuredAdapter(logging.LoggerAdapter):
    """Adapter that folds its default fields and call-site extras into ``structured_data``."""

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        fields: Dict[str, Any] = dict(self.extra or {})
        extra = kwargs.get("extra")
        if isinstance(extra, dict):
            call_fields = extra.get("structured_data")
            if isinstance(call_fields, Mapping):
                fields.update(call_fields)
        else:
            extra = {}
        extra["structured_data"] = fields
        kwargs["extra"] = extra
        return msg, kwargs


_STRUCTURED_ATTR = "_mapscore_structured"


def _effective_level(level: int, environment: str) -> int:
    if environment in ("dev", "test") and level == logging.INFO:
        return logging.DEBUG
    if environment == "prod":
        return max(level, logging.INFO)
    return level


def configure_logging(*, level: int | str = logging.INFO, environment: str = "dev") -> None:
    """Install the JSON handler on the root logger (idempotent).

    ``dev`` and ``test`` lower the default INFO level to DEBUG; ``prod`` never
    goes below INFO.
    """
    root = logging.getLogger()
    if bool(getattr(root, _STRUCTURED_ATTR, False)):
        return
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_effective_level(level, environment))
    setattr(root, _STRUCTURED_ATTR, True)


def get_logger(name: str, **defaults: Any) -> StructuredAdapter:
    """Return a structured logger adapter injecting default structured fields."""

    return StructuredAdapter(logging.getLogger(name), defaults)


def get_correlation_id() -> str | None:
    return _CORRELATION_ID.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id (generated when absent) for the duration of the block."""

    cid = correlation_id or uuid4().hex
    token = _CORRELATION_ID.set(cid)
    try:
        yield cid
    finally:
        _CORRELATION_ID.reset(token)


__all__ = [
    "JsonFormatter",
    "StructuredAdapter",
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "correlation_context",
]
