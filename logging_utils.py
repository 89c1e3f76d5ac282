"""Logging configuration helpers for quickticket."""

from __future__ import annotations

import json
import logging
import sys
from typing import IO, Any, ClassVar, Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """JSON formatter that folds ``extra`` fields into each log line."""

    RESERVED_KEYS: ClassVar[frozenset[str]] = frozenset(
        logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
    ) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "event": record.getMessage(),
        }

        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self.RESERVED_KEYS and not key.startswith("_"):
                data[key] = value

        return json.dumps(data, default=str)


def _resolve_log_level(level_name: Optional[str]) -> int:
    if not level_name:
        return logging.INFO
    numeric = logging.getLevelName(level_name.upper())
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def configure_logging(
    level_name: Optional[str], json_enabled: bool, stream: Optional[IO[str]] = None
) -> None:
    """Replace root handlers with one stream handler using the chosen format.

    Logs go to stderr by default so parsed output on stdout stays clean.
    """

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(_resolve_log_level(level_name))

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json_enabled else logging.Formatter(_DEFAULT_FORMAT))
    root.addHandler(handler)
