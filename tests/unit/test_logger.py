"""Unit tests for logging infrastructure."""

import json
import logging
import sys
import uuid

import pytest

from src.utils.logger import JSONFormatter, RichTextFormatter, get_logger, logger


def make_record(level=logging.INFO, msg="Test message", exc_info=None, **extra):
    record = logging.LogRecord(
        name="pantry_chef.test",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter produces valid JSON output."""

    def test_json_formatter_outputs_valid_json(self):
        parsed = json.loads(JSONFormatter().format(make_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "pantry_chef.test"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_json_formatter_includes_exception_traceback(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record(logging.ERROR, "Error occurred", exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))

        assert "ValueError" in parsed["exception"]

    def test_json_formatter_includes_recipe_extras(self):
        """request_id, ingredient_key and error_kind are carried through."""
        record = make_record(request_id="req-123", ingredient_key="Cheese,Tomato", error_kind="malformed_json")

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["request_id"] == "req-123"
        assert parsed["ingredient_key"] == "Cheese,Tomato"
        assert parsed["error_kind"] == "malformed_json"

    def test_json_formatter_ignores_unknown_extras(self):
        parsed = json.loads(JSONFormatter().format(make_record(session_id="sess-456")))
        assert "session_id" not in parsed

    def test_json_formatter_stringifies_non_json_values(self):
        parsed = json.loads(JSONFormatter().format(make_record(request_id=uuid.UUID(int=1))))
        assert parsed["request_id"] == "00000000-0000-0000-0000-000000000001"

    def test_json_timestamp_is_utc_milliseconds(self):
        record = make_record()
        record.created = 1792398600.5

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["timestamp"] == "2026-10-19T08:30:00.500Z"

    def test_json_keeps_non_ascii_messages(self):
        output = JSONFormatter().format(make_record(msg="Isoisän juustoleipä"))
        assert "Isoisän juustoleipä" in output


class TestRichTextFormatter:
    """Test RichTextFormatter produces colored text output."""

    @pytest.mark.parametrize("level", [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR])
    def test_includes_icon_and_level(self, level):
        name = logging.getLevelName(level)
        output = RichTextFormatter().format(make_record(level))
        assert RichTextFormatter.ICONS[name] in output
        assert name in output

    def test_includes_logger_name_and_message(self):
        output = RichTextFormatter().format(make_record(msg="Recipe stored"))
        assert "pantry_chef.test" in output
        assert "Recipe stored" in output

    def test_appends_ingredient_key(self):
        output = RichTextFormatter().format(make_record(ingredient_key="Cheese,Tomato"))
        assert "[key=Cheese,Tomato]" in output

    def test_context_suffix_uses_short_labels(self):
        output = RichTextFormatter().format(make_record(ingredient_key="egg", error_kind="no_json_found"))
        assert "[key=egg kind=no_json_found]" in output

    def test_no_suffix_without_context(self):
        assert "[" not in RichTextFormatter().format(make_record(msg="Recipe stored"))

    def test_includes_exception_traceback(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record(logging.ERROR, exc_info=sys.exc_info())

        output = RichTextFormatter().format(record)

        assert "RuntimeError: boom" in output


class TestGetLogger:
    """Test get_logger configuration."""

    def _fresh_name(self):
        return f"pantry_chef.test.{uuid.uuid4().hex}"

    def test_get_logger_returns_same_instance(self):
        name = self._fresh_name()
        first = get_logger(name)
        second = get_logger(name)
        assert first is second
        assert len(second.handlers) == 1

    def test_respects_log_level_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert get_logger(self._fresh_name()).level == logging.DEBUG

    def test_invalid_log_level_defaults_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INVALID")
        assert get_logger(self._fresh_name()).level == logging.INFO

    def test_log_type_json(self, monkeypatch):
        monkeypatch.setenv("LOG_TYPE", "json")
        handler = get_logger(self._fresh_name()).handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_log_type_text_default(self, monkeypatch):
        monkeypatch.delenv("LOG_TYPE", raising=False)
        handler = get_logger(self._fresh_name()).handlers[0]
        assert isinstance(handler.formatter, RichTextFormatter)


class TestModuleLogger:
    def test_module_logger_name(self):
        assert logger.name == "pantry_chef"
        assert logger.handlers

    def test_sdk_loggers_quieted(self):
        assert logging.getLogger("google.genai").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING
