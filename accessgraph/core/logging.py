"""Logging for accessgraph.

A single ``accessgraph`` stdlib logger is configured once at import time and
exposed as a ``ContextualLogger``. Components derive child loggers carrying
fixed dimensions:

    resolver_logger = logger.with_prefix("GroupClosureResolver: ").with_context(
        component="group_closure_resolver"
    )
"""

import json
import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from accessgraph.core.config import settings

_RESERVED_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()) | {
    "message",
    "asctime",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with the record's context dimensions inlined."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record as JSON."""
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_ATTRS:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that attaches context dimensions to every record."""

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Initialize with the underlying logger, dimensions and message prefix."""
        super().__init__(logger, dict(dimensions or {}))
        self.dimensions: Dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        """Prefix the message and merge context dimensions into ``extra``."""
        extra = dict(self.dimensions)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.dimensions, **dimensions}
        return ContextualLogger(self.logger, merged, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger whose messages start with ``prefix``."""
        return ContextualLogger(self.logger, self.dimensions, prefix)


def _configure_logger() -> logging.Logger:
    base = logging.getLogger("accessgraph")
    base.setLevel(settings.LOG_LEVEL.upper())
    if not base.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.LOCAL_DEVELOPMENT:
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
        else:
            handler.setFormatter(JSONFormatter())
        base.addHandler(handler)
    return base


logger = ContextualLogger(_configure_logger())
