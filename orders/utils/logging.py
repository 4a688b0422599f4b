"""
Custom JSON formatter for logging (without external dependencies).
"""
import json
import logging
from datetime import datetime, timezone

from orders.infra.pii_masker import mask_pii_in_dict

EXTRA_FIELDS = (
    "request_id",
    "operation",
    "order_id",
    "status",
    "count",
    "generation",
    "token",
    "latest_token",
    "error",
    "error_type",
)


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record):
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        extra = {
            field: getattr(record, field)
            for field in EXTRA_FIELDS
            if hasattr(record, field)
        }
        log_data.update(mask_pii_in_dict(extra))

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)
