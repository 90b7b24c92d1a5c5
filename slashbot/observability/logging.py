"""Structured logging utilities for the bot."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict

_TOKEN_PATTERN = re.compile(r"(https://api\.telegram\.org/(?:file/)?bot)[^/\s]+", re.I)
_REDACTED = r"\1***REDACTED***"


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    #: Attributes provided by :mod:`logging` that should not leak into the payload.
    _RESERVED = frozenset(
        logging.LogRecord("", 0, "", 0, "", (), None).__dict__
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in self._RESERVED and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        if record.stack_info:
            payload["stack"] = record.stack_info

        return json.dumps(payload, ensure_ascii=False, default=str)


def _redact(value: Any) -> Any:
    if isinstance(value, str):
        return _TOKEN_PATTERN.sub(_REDACTED, value)
    return value


class TelegramTokenRedactor(logging.Filter):
    """Mask bot tokens embedded in Telegram API URLs."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            record.msg = _redact(record.msg)
            if isinstance(record.args, tuple):
                record.args = tuple(_redact(arg) for arg in record.args)
            elif isinstance(record.args, dict):
                record.args = {k: _redact(v) for k, v in record.args.items()}
        except Exception:  # nosec B110 - never break logging
            pass
        return True


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging handler for structured output."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(TelegramTokenRedactor())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    logging.captureWarnings(True)

    # PTB's HTTP client logs full request URLs, token included.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
