# src/userapi/tests/test_logging/test_formatters.py
import json
import logging
import sys

from userapi.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record():
    # create a LogRecord that simulates formatting with args
    return logging.LogRecord("userapi", logging.INFO, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    # attach an extra (simulate extra param)
    rec.user_id = "u-1"
    rec.request_id = "req-1"
    fmt = JsonFormatter(env="testing", service="svc")
    data = json.loads(fmt.format(rec))
    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "userapi"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert "timestamp" in data
    assert data["request_id"] == "req-1"
    assert data["user_id"] == "u-1"
    assert "version" in data


def test_json_formatter_default_service():
    data = json.loads(JsonFormatter().format(make_record()))
    assert data["service"] == "userapi"


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))
    # non-serializable obj should be stringified
    assert isinstance(data["obj"], str)


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        rec = logging.LogRecord("userapi", logging.ERROR, __file__, 10, "failed", (), sys.exc_info())
    data = json.loads(JsonFormatter().format(rec))
    assert "ValueError: boom" in data["exc_info"]


def test_color_formatter_line_layout():
    rec = make_record()
    rec.request_id = "req-9"
    line = ColorFormatter().format(rec)
    assert "INFO" in line
    assert "req-9" in line
    assert line.endswith("hello tester")
