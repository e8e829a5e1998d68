import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from .snapshot import RECORD_CONTEXT_PREFIX


class StructuredFormatter(logging.Formatter):
    """JSON formatter that lifts ``ctx_`` record attributes into the entry"""

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_timestamp:
            log_entry["timestamp"] = (
                datetime.fromtimestamp(record.created, tz=timezone.utc)
                .isoformat()
                .replace("+00:00", "Z")
            )

        for key, value in record.__dict__.items():
            if key.startswith(RECORD_CONTEXT_PREFIX):
                log_entry[key[len(RECORD_CONTEXT_PREFIX):]] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, separators=(",", ":"), default=str)
