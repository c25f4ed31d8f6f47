"""Structured Logging — verifies JSON log shape and extra field surfacing."""

import json
import logging

from app.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.handle_filters", logging.WARNING, __file__, 1,
        "Provider get_meshery_filter failed: boom", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "app.services.handle_filters"
    assert log["message"] == "Provider get_meshery_filter failed: boom"
    assert "timestamp" in log


def test_json_formatter_surfaces_extra_fields_and_skips_none():
    log = json.loads(JSONFormatter().format(
        _record(operation="get_meshery_filter", filter_id="abc", provider=None),
    ))
    assert log["operation"] == "get_meshery_filter"
    assert log["filter_id"] == "abc"
    assert "provider" not in log
