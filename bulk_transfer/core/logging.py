"""Root logger configuration with optional structured JSON output."""
from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger.json import JsonFormatter

PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
HANDLER_NAME = "bulk-transfer-stdout"


class ServiceJsonFormatter(JsonFormatter):
    """JSON formatter stamping every record with time, level and service name."""

    def __init__(self, *args: Any, service_name: str = "bulk-transfer", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def configure_logging(level: str = "INFO", json_output: bool = True, service_name: str = "bulk-transfer") -> None:
    """Install (or replace) the service stdout handler on the root logger."""

    root = logging.getLogger()
    root.setLevel(level.upper())
    for existing in [item for item in root.handlers if item.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    if json_output:
        handler.setFormatter(ServiceJsonFormatter("%(name)s %(message)s", service_name=service_name))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)
