"""Request Logging — one JSON object per log line, carrying the OrderItem call context.

Invariants:
    - Each line has timestamp, level, logger and message
    - resource/operation/document_id/user_id/error_code/path are copied from `extra` when set
    - Values json cannot encode (datetimes, ids) are written with str()
    - "text" format is the plain formatter for local runs
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_KEYS = (
    "resource", "operation", "document_id", "user_id", "error_code", "path",
)


class JSONFormatter(logging.Formatter):
    """Render a record and its OrderItem context keys as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            (key, getattr(record, key))
            for key in CONTEXT_KEYS
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install one stderr handler on the root logger; later calls replace it."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root = logging.getLogger()
    for old in [h for h in root.handlers if getattr(h, "_order_api", False)]:
        root.removeHandler(old)
    handler._order_api = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
