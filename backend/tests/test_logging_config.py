"""
Unit tests for the logging formatters.
"""

import json
import logging

from moodcheck.core.logging_config import ColoredFormatter, JSONFormatter, filter_sensitive_data


def _record(level=logging.INFO, **extra):
    record = logging.LogRecord("moodcheck.test", level, __file__, 10, "hello", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for console and file formatters sharing one record."""

    def test_colored_formatter_leaves_record_untouched(self):
        record = _record(logging.WARNING)

        console_line = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[33m" in console_line
        assert record.levelname == "WARNING"

    def test_json_line_after_console_has_plain_level(self):
        record = _record(logging.ERROR)

        ColoredFormatter("%(levelname)s %(message)s").format(record)
        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "ERROR"
        assert data["message"] == "hello"

    def test_json_masks_extra_fields(self):
        record = _record(extra_fields={"api_key": "secret_abc", "mood": "Calm"})

        data = json.loads(JSONFormatter().format(record))

        assert data["mood"] == "Calm"
        assert data["api_key"] != "secret_abc"


class TestFilterSensitiveData:
    """Tests for secret masking."""

    def test_nested_keys_are_masked(self):
        data = filter_sensitive_data({"notion": {"api_key": "secret_abc"}, "database_id": "db"})
        assert data["notion"]["api_key"] != "secret_abc"
        assert data["database_id"] == "db"
