import json
import logging

from app.core.logging import JsonFormatter


def _record(**extra):
    record = logging.LogRecord("payments", logging.INFO, __file__, 1, "purchase_granted", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_extra_fields_are_lifted():
    out = json.loads(JsonFormatter(env="test").format(_record(user_id="u1", course_ids=[1, 3], skipped=None)))
    assert out["message"] == "purchase_granted"
    assert out["logger"] == "payments"
    assert out["env"] == "test"
    assert out["user_id"] == "u1"
    assert out["course_ids"] == [1, 3]
    assert "skipped" not in out
    assert "lineno" not in out


def test_non_json_values_are_stringified():
    from datetime import datetime, timezone

    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    out = json.loads(JsonFormatter().format(_record(paid_at=ts)))
    assert out["paid_at"] == str(ts)
    assert "env" not in out


def test_exception_included():
    try:
        raise ValueError("boom")
    except ValueError:
        import sys

        record = _record()
        record.exc_info = sys.exc_info()
    out = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in out["exception"]
