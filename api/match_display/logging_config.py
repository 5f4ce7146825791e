"""Structured JSON logging for the display service.

Every line carries the service, environment and configured source zone.
Match-scoped records (anything logged with ``vlr_id`` or ``viewer_tz`` in
``extra=``) get those two keys promoted to the top level so a single match
or viewer zone can be filtered across services; remaining extras are nested
under ``context``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import tzinfo
from typing import Any

from .utils.datetime_utils import now_utc

# Attributes every LogRecord has; anything else on a record came from ``extra=``.
_RESERVED_LOG_RECORD_KEYS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

MATCH_FIELDS = ("vlr_id", "viewer_tz")


def _zone_name(value: Any) -> Any:
    if isinstance(value, tzinfo):
        return getattr(value, "key", None) or str(value)
    return value


class JSONFormatter(logging.Formatter):
    def __init__(self, service: str, environment: str, source_timezone: str | None = None) -> None:
        super().__init__()
        self._service = service
        self._environment = environment
        self._source_timezone = source_timezone

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": now_utc().isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "service": self._service,
            "environment": self._environment,
            "source_tz": self._source_timezone,
            "message": record.getMessage(),
        }
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_KEYS
        }
        for field in MATCH_FIELDS:
            if field in context:
                payload[field] = _zone_name(context.pop(field))
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _normalize_log_level(level: str | None, environment: str) -> int:
    env = environment.lower()
    if level:
        normalized = level.strip().upper()
    else:
        normalized = "INFO" if env == "production" else "DEBUG"
    return logging.getLevelNamesMapping().get(normalized, logging.INFO)


def configure_logging(
    service: str,
    environment: str,
    log_level: str | None = None,
    source_timezone: str | None = None,
) -> None:
    resolved_level = _normalize_log_level(log_level or os.getenv("LOG_LEVEL"), environment)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        JSONFormatter(service=service, environment=environment, source_timezone=source_timezone)
    )
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(resolved_level)
