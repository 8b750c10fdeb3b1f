"""Structured Logging — JSON formatter and handler setup."""

import json
import logging

import pytest

from foopoc.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "foopoc.test", logging.ERROR, __file__, 1, "boom %s", ("x",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_basic_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "ERROR"
    assert out["logger"] == "foopoc.test"
    assert out["message"] == "boom x"
    assert "timestamp" in out


def test_json_formatter_surfaces_extras():
    out = json.loads(JSONFormatter().format(_record(
        error_code="H1LS2G", path="/foos", trail=["a", "b"],
    )))
    assert out["error_code"] == "H1LS2G"
    assert out["path"] == "/foos"
    assert out["trail"] == ["a", "b"]
    assert "method" not in out


@pytest.fixture
def restore_root():
    level = logging.root.level
    yield
    setup_logging("WARNING", log_to_file=False)
    logging.root.setLevel(level)


def test_setup_logging_does_not_stack_handlers(restore_root):
    before = len(logging.root.handlers)
    setup_logging("INFO")
    setup_logging("INFO")
    assert len(logging.root.handlers) <= before + 1
    assert logging.root.level == logging.INFO


def test_setup_logging_writes_json_file(tmp_path, restore_root):
    path = tmp_path / "logs" / "app.json"
    setup_logging("DEBUG", "text", log_to_file=True, log_file_path=str(path))

    logging.getLogger("foopoc.test").info("hello", extra={"error_code": "Z0Z0Z0"})
    for handler in logging.root.handlers:
        handler.flush()

    line = path.read_text(encoding="utf-8").strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["message"] == "hello"
    assert entry["error_code"] == "Z0Z0Z0"
