"""
Root logger setup for the news impact API.

Records go to stdout, either as one JSON object per line (LOG_JSON=1) or as
plain text. Messages carry numeric user ids only, never emails or tokens.
"""
import json
import logging
import os
import sys

PLAIN_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"

# Chatty third-party loggers capped at WARNING.
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine")

_TRUTHY = {"1", "true", "yes", "on"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def log_level_from_env() -> int:
    name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    level = log_level_from_env()
    as_json = os.getenv("LOG_JSON", "").strip().lower() in _TRUTHY

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if as_json else logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
