"""Structured logging setup shared by the API and the command-line scripts."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from vna_engine.config import env_setting

# LogRecord attributes that are never copied into the structured payload
_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "event",
    "message",
}


class StructuredFormatter(logging.Formatter):
    """Render records as ``key=value`` text or as one JSON object per line."""

    def __init__(self, json_output: bool) -> None:
        super().__init__()
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", "log"),
        }
        message = record.getMessage()
        if message and message != payload["event"]:
            payload["message"] = message

        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED_ATTRS:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        if self.json_output:
            return json.dumps(payload, default=str, ensure_ascii=False)

        ordered = [
            f"timestamp={payload.pop('timestamp')}",
            f"level={payload.pop('level')}",
            f"logger={payload.pop('logger')}",
            f"event={payload.pop('event')}",
        ]
        ordered.extend(f"{k}={v}" for k, v in payload.items())
        return " ".join(ordered)


def configure_logging() -> None:
    """Install the structured handler on the root logger (once per process).

    ``VNA_LOG_LEVEL`` sets the level (default WARNING) and
    ``VNA_LOG_FORMAT=json`` switches to JSON lines.
    """
    root = logging.getLogger()
    if getattr(root, "_vna_logging_configured", False):
        return

    level = env_setting("log_level", "WARNING").upper()
    json_output = env_setting("log_format", "text").lower() == "json"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(json_output=json_output))

    root.addHandler(handler)
    root.setLevel(level)
    root._vna_logging_configured = True  # type: ignore[attr-defined]


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    logger.log(level, event, extra={"event": event, **fields})
