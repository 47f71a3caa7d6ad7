"""Structured Logging — one JSON object per line, carrying the ranking bucket.

Invariants:
    - Every line has timestamp, level, logger, message
    - Bucket fields (athlete_id, discipline, year, ranking_type) and error_code
      appear only when the call site passed them in `extra`
    - Enum values are rendered by value, never as `Discipline.SLALOM`
    - setup_logging() is idempotent: re-running it replaces, never stacks, handlers

Design Decisions:
    - Hand-rolled formatter on stdlib logging; no structlog dependency
    - SQLAlchemy engine chatter pinned to WARNING unless LOG_LEVEL is DEBUG
"""

import json
import logging
from datetime import datetime, timezone
from enum import Enum

BUCKET_FIELDS = ("athlete_id", "discipline", "year", "ranking_type")
EXTRA_FIELDS = BUCKET_FIELDS + ("error_code", "path")

_HANDLER_NAME = "rankings"


def _plain(value):
    return value.value if isinstance(value, Enum) else value


class JSONFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = _plain(value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)

    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    if root.level > logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
