"""Unit tests for structured log formatting.

Run with: pytest tests/test_logs.py -v
"""

import importlib
import json
import logging
import warnings

from pythonjsonlogger.json import JsonFormatter

from festival import logs
from festival.logs import FestivalJsonFormatter


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="festival.services.registration_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Registration committed",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFestivalJsonFormatter:
    def test_includes_service_and_level(self):
        formatter = FestivalJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
        payload = json.loads(formatter.format(make_record()))
        assert payload["service"] == "festival-pricing"
        assert payload["level"] == "INFO"
        assert payload["message"] == "Registration committed"
        assert "timestamp" in payload

    def test_includes_festival_identifiers(self):
        formatter = FestivalJsonFormatter("%(message)s")
        payload = json.loads(
            formatter.format(make_record(event_id="evt-1", table_number=4, total_amount="1200.00"))
        )
        assert payload["event_id"] == "evt-1"
        assert payload["table_number"] == 4
        assert payload["total_amount"] == "1200.00"

    def test_imports_without_deprecation_warning(self):
        """The formatter builds on the current pythonjsonlogger.json module."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            reloaded = importlib.reload(logs)
        assert issubclass(reloaded.FestivalJsonFormatter, JsonFormatter)
