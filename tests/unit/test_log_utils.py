"""Unit tests for logging helpers."""

import logging

from meeting_indexer.observability.log_utils import (
    MAX_STORED_ERROR_LENGTH,
    log_exception_with_context,
    safe_log_value,
    truncate_error,
)


def test_truncate_error_bounds_length():
    assert truncate_error("x" * 5000) == "x" * MAX_STORED_ERROR_LENGTH
    assert truncate_error("short") == "short"


def test_safe_log_value_summarises_collections():
    assert safe_log_value([1, 2, 3]) == "list(3 items)"
    assert safe_log_value({"a": 1}) == "dict(1 keys)"
    assert safe_log_value(None) == "None"
    assert safe_log_value("y" * 600).startswith("y" * 500 + "... (truncated")


def test_log_exception_with_context_attaches_error_fields(caplog):
    logger = logging.getLogger("meeting_indexer.tests")

    with caplog.at_level(logging.ERROR, logger="meeting_indexer.tests"):
        log_exception_with_context(logger, "boom", RuntimeError("bad"), document_id="d-1")

    record = caplog.records[-1]
    assert record.error_type == "RuntimeError"
    assert record.error_msg == "bad"
    assert record.document_id == "d-1"
