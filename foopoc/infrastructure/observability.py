"""Structured Logging — JSON formatter and setup for console and rotating file.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, path, trail) surfaced when present
    - File output is JSON only and rotates at 5 MB keeping 3 backups

Design Decisions:
    - setup_logging called once on startup via lifespan; repeated calls replace
      the handlers it installed instead of stacking duplicates
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

_installed: list[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("error_code", "path", "method", "trail", "status_code"):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    log_to_file: bool = False,
    log_file_path: str = "logs/app.json",
) -> None:
    """Configure root logging for the application."""
    for handler in _installed:
        logging.root.removeHandler(handler)
        handler.close()
    _installed.clear()

    console = logging.StreamHandler()
    if fmt == "json":
        console.setFormatter(JSONFormatter())
    else:
        console.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
        ))
    _installed.append(console)

    if log_to_file:
        directory = os.path.dirname(log_file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        rotating = RotatingFileHandler(
            log_file_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        rotating.setFormatter(JSONFormatter())
        _installed.append(rotating)

    for handler in _installed:
        logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
