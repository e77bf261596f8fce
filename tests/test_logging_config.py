"""Tests for the JSON logging configuration."""

import json
import logging

from matrix_todo.logging_config import configure_logging


def test_configure_logging_emits_json(capsys):
    """Records are written to stdout as JSON with GCP field names."""
    configure_logging("debug")
    logging.getLogger("matrix_todo.test").info("event %s queued", "C1:1.1:fire:U1")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["severity"] == "INFO"
    assert record["logger"] == "matrix_todo.test"
    assert record["service"] == "matrix-todo"
    assert record["message"] == "event C1:1.1:fire:U1 queued"
    assert logging.getLogger().level == logging.DEBUG


def test_client_libraries_are_quieted():
    configure_logging()
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger().level == logging.INFO
