"""Tests for the JSON log formatter."""

import json
import logging

import pytest

from portfolio_chat.logging_config import JSONFormatter, configure_logging


def _record(level, msg, **extra):
    record = logging.LogRecord("portfolio_chat.test", level, __file__, 1, msg, None, None)
    record.__dict__.update(extra)
    return record


def test_formats_core_fields_and_context():
    line = JSONFormatter().format(_record(logging.INFO, "Chat request received", requestId="abc1234"))
    entry = json.loads(line)

    assert entry["level"] == "INFO"
    assert entry["message"] == "Chat request received"
    assert entry["requestId"] == "abc1234"
    assert entry["ts"].endswith("Z")
    assert "levelno" not in entry


def test_warning_is_rendered_as_warn():
    entry = json.loads(JSONFormatter().format(_record(logging.WARNING, "Method not allowed")))

    assert entry["level"] == "WARN"


def test_non_serializable_context_is_stringified():
    entry = json.loads(JSONFormatter().format(_record(logging.ERROR, "boom", data={1, 2})))

    assert entry["level"] == "ERROR"
    assert isinstance(entry["data"], str)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_errors_go_to_stderr_and_the_rest_to_stdout(capsys, restore_root_logger):
    configure_logging("INFO")
    log = logging.getLogger("portfolio_chat.test")

    log.info("Chat request received", extra={"requestId": "abc1234"})
    log.warning("Message too long", extra={"requestId": "abc1234"})
    log.error("Request failed", extra={"requestId": "abc1234"})
    log.debug("Request body")

    captured = capsys.readouterr()
    stdout = [json.loads(line) for line in captured.out.splitlines()]
    stderr = [json.loads(line) for line in captured.err.splitlines()]

    assert [(e["level"], e["message"]) for e in stdout] == [
        ("INFO", "Chat request received"),
        ("WARN", "Message too long"),
    ]
    assert [(e["level"], e["message"]) for e in stderr] == [("ERROR", "Request failed")]
    assert stderr[0]["requestId"] == "abc1234"
