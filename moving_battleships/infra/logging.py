"""Logging setup for the game and its headless runner."""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path

__all__ = ["JsonFormatter", "configure_logging", "resolve_log_level_name", "setup_logging"]

_STANDARD_RECORD_FIELDS = frozenset(
    {
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
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields go under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_FIELDS
        }
        if extras:
            payload["fields"] = extras
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def resolve_log_level_name(default: str = "INFO") -> str:
    """Game-prefixed level wins over the generic ``LOG_LEVEL``."""
    value = os.getenv("MB_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def configure_logging(
    *,
    level_name: str = "INFO",
    console_format: str = "text",
    file_path: str | None = None,
) -> None:
    """Replace root handlers with a console handler and an optional JSON file."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(_resolve_formatter(console_format))
    handlers: list[logging.Handler] = [console_handler]

    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(JsonFormatter())
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)


def setup_logging() -> str | None:
    """Configure logging from ``MB_LOG_*`` env vars. Returns the log file path."""
    console_format = os.getenv("MB_LOG_FORMAT", os.getenv("LOG_FORMAT", "text")).lower()
    file_path = _resolve_run_log_file_path()
    configure_logging(
        level_name=resolve_log_level_name(),
        console_format=console_format,
        file_path=file_path,
    )
    if file_path:
        logging.getLogger(__name__).info("logging_file=%s", file_path)
    return file_path


def _resolve_run_log_file_path() -> str | None:
    configured = os.getenv("MB_LOG_DIR", "").strip()
    if not configured:
        return None
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(Path(configured) / f"moving_battleships_run_{stamp}.jsonl")


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
