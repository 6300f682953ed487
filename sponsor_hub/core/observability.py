"""Logging setup shared by the API process and the alembic environment."""

import json
import logging
from datetime import datetime, timezone

# Extra attributes surfaced by the JSON formatter when a log call passes them
EXTRA_FIELDS = ("user_id", "survey_id", "path", "status_code")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger. Safe to call more than once."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_sponsor_hub", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._sponsor_hub = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
