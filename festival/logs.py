"""Structured JSON log formatting."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

EXTRA_FIELDS = ("event_id", "registration_id", "table_number", "package_type", "total_amount")


class FestivalJsonFormatter(JsonFormatter):
    """JSON formatter adding service info and festival identifiers from ``extra``."""

    service_name = "festival-pricing"

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name
        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_record[name] = getattr(record, name)
