"""Structured logging tests — JSON formatter fields and idempotent setup."""

import json
import logging

from employee_directory.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "employee_directory.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "WARNING"
    assert out["logger"] == "employee_directory.test"
    assert out["message"] == "hello world"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    out = json.loads(JSONFormatter().format(
        _record(employee_id="E1", record_count=3, secret="nope"),
    ))
    assert out["employee_id"] == "E1"
    assert out["record_count"] == 3
    assert "secret" not in out


def test_setup_logging_is_idempotent():
    before = len(logging.root.handlers)
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    try:
        assert len(logging.root.handlers) == before + 1
        assert logging.root.level == logging.INFO
    finally:
        for handler in list(logging.root.handlers):
            if handler.get_name() == "employee_directory":
                logging.root.removeHandler(handler)
