"""Tests for JSON log formatting and the FastAPI response sink."""

import json
import logging
import sys

import pytest

from error_responder.config import Settings, read_environment_name
from error_responder.infrastructure.fastapi_sink import JSONResponseSink
from error_responder.infrastructure.observability import JSONFormatter, setup_logging
from error_responder.services.error_responder import ErrorResponder


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "error_responder.test", logging.ERROR, __file__, 1, "failed %s", ("x",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "ERROR"
    assert out["logger"] == "error_responder.test"
    assert out["message"] == "failed x"
    assert "timestamp" in out


def test_json_formatter_surfaces_error_extras():
    out = json.loads(JSONFormatter().format(
        _record(error_code="NOT_FOUND", status=404, path="/items/1"),
    ))
    assert out["error_code"] == "NOT_FOUND"
    assert out["status"] == 404
    assert out["path"] == "/items/1"


def test_json_formatter_skips_absent_extras():
    out = json.loads(JSONFormatter().format(_record()))
    assert "error_code" not in out
    assert "status" not in out


def test_setup_logging_installs_handler():
    previous_level = logging.root.level
    handler = setup_logging("debug", "text")
    try:
        assert handler in logging.root.handlers
        assert logging.root.level == logging.DEBUG
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)


def test_read_environment_name_is_not_cached(set_env):
    set_env("staging")
    assert read_environment_name() == "staging"
    set_env("development")
    assert read_environment_name() == "development"


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.app_env is None
    assert settings.log_format == "json"


def test_sink_builds_json_response():
    sink = JSONResponseSink(headers={"X-Trace": "1"})
    sink.set_status(404).emit_json({"error": {"code": "NOT_FOUND", "message": "m"}})
    assert sink.response.status_code == 404
    assert sink.response.headers["x-trace"] == "1"
    assert json.loads(sink.response.body) == {
        "error": {"code": "NOT_FOUND", "message": "m"},
    }


def test_sink_rejects_second_response():
    sink = JSONResponseSink()
    sink.set_status(500).emit_json({"error": {}})
    with pytest.raises(RuntimeError, match="already sent"):
        sink.set_status(500)


def test_sink_requires_status_before_body():
    with pytest.raises(RuntimeError, match="Status must be set"):
        JSONResponseSink().emit_json({"error": {}})


def test_responder_send_propagates_sink_error():
    sink = JSONResponseSink()
    responder = ErrorResponder().send(sink)
    with pytest.raises(RuntimeError, match="already sent"):
        responder.send(sink)


def test_setup_logging_twice_keeps_one_handler():
    previous_level = logging.root.level
    first = setup_logging("info", "json")
    second = setup_logging("info", "json")
    try:
        assert first not in logging.root.handlers
        assert logging.root.handlers.count(second) == 1
    finally:
        logging.root.removeHandler(second)
        logging.root.setLevel(previous_level)


def test_json_formatter_names_exception_type():
    try:
        raise KeyError("k")
    except KeyError:
        record = _record()
        record.exc_info = sys.exc_info()
    out = json.loads(JSONFormatter().format(record))
    assert out["exception_type"] == "KeyError"
    assert "Traceback" in out["exception"]
