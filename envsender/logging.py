from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from typing import Any

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# structured fields attached through ``extra=`` by the client and runtime
CONTEXT_FIELDS = ("record_source", "url", "path", "status_code")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, separators=(",", ":"), default=str)


def select_formatter(fmt: str | None = None) -> logging.Formatter:
    chosen = (fmt or os.getenv("ENVSENDER_LOG_FORMAT", "text")).strip().lower()
    if chosen == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)


def configure_logging(verbose: bool = False, fmt: str | None = None) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(select_formatter(fmt))
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(handler)
    # request lines from httpx repeat what the client already logs
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
