"""Structured JSON logging for the portal gateway"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from hire_purchase_portal.config import settings

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per line, stamped with the record time and the service name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Route every log record to stdout as JSON"""
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(logger)s %(message)s"))
    root.addHandler(handler)

    # Backend calls are already covered by the client's own logs and metrics
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_export(
    report: str,
    fmt: str,
    row_count: int,
    duration_ms: float,
) -> None:
    """Log structured export outcome for analysis"""
    logging.getLogger("hire_purchase_portal.export").info(
        "Report exported",
        extra={
            "report": report,
            "step": "export_complete",
            "format": fmt,
            "row_count": row_count,
            "duration_ms": duration_ms,
        },
    )
