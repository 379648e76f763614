"""Tests for observability/logger.py and observability/metrics.py"""
import io
import json
import logging
import os
import sys
from datetime import datetime

import pytest

from listdiff import diff_sync
from listdiff.errors import ListDiffProtocolError
from listdiff.observability import (
    PACKAGE_LOGGER,
    MetricsHook,
    NoopMetricsHook,
    StructuredFormatter,
    configure_logging,
    get_logger,
    resolve_metrics,
)


@pytest.fixture
def log_stream():
    """Route the package logger into a buffer at DEBUG, restore afterwards."""
    stream = io.StringIO()
    configure_logging(logging.DEBUG, stream)
    yield stream
    configure_logging()


def _lines(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestStructuredFormatter:
    def _get_record(self, msg, exc_info=None, extra_fields=None):
        record = logging.LogRecord(
            name="listdiff.test",
            level=logging.INFO,
            pathname="",
            lineno=0,
            msg=msg,
            args=(),
            exc_info=exc_info,
        )
        if extra_fields is not None:
            record.extra_fields = extra_fields
        return record

    def test_basic_format(self):
        record = self._get_record("hello")
        result = json.loads(StructuredFormatter().format(record))
        assert result["message"] == "hello"
        assert result["level"] == "INFO"
        assert result["logger"] == "listdiff.test"
        assert result["pid"] == os.getpid()
        assert datetime.fromisoformat(result["ts"]).timestamp() == pytest.approx(record.created)

    def test_extra_fields_merged(self):
        record = self._get_record("msg", extra_fields={"op": "diff", "ops": 4})
        result = json.loads(StructuredFormatter().format(record))
        assert result["op"] == "diff"
        assert result["ops"] == 4

    def test_listdiff_error_fields(self):
        try:
            raise ListDiffProtocolError("lost", context={"stage": "result"})
        except ListDiffProtocolError:
            exc_info = sys.exc_info()
        result = json.loads(StructuredFormatter().format(self._get_record("err", exc_info)))
        assert result["error_code"] == "PROTOCOL_ERROR"
        assert result["error_context"] == {"stage": "result"}
        assert "ListDiffProtocolError" in result["exception"]

    def test_foreign_exception_has_no_error_code(self):
        try:
            raise ValueError("test error")
        except ValueError:
            exc_info = sys.exc_info()
        result = json.loads(StructuredFormatter().format(self._get_record("err", exc_info)))
        assert "ValueError" in result["exception"]
        assert "error_code" not in result

    def test_non_serialisable_fields_use_repr(self):
        record = self._get_record("msg", extra_fields={"obj": object()})
        result = json.loads(StructuredFormatter().format(record))
        assert result["obj"].startswith("<object object")


class TestLoggers:
    def test_children_share_the_package_handler(self):
        child = get_logger("listdiff.api")
        package = logging.getLogger(PACKAGE_LOGGER)
        assert child.handlers == []
        assert child.propagate
        assert len(package.handlers) == 1
        assert not package.propagate

    def test_foreign_name_is_rejected(self):
        with pytest.raises(ValueError):
            get_logger("listdiffer")

    def test_default_level_is_warning(self):
        configure_logging()
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_reconfigure_replaces_handler(self, log_stream):
        configure_logging("debug", log_stream)
        package = logging.getLogger(PACKAGE_LOGGER)
        assert len(package.handlers) == 1
        assert package.level == logging.DEBUG

    def test_unknown_level_is_rejected(self):
        with pytest.raises(ValueError):
            configure_logging("chatty")

    def test_diff_logs_through_package_handler(self, log_stream):
        diff_sync(["a", "x"], ["a", "y"])
        [line] = [entry for entry in _lines(log_stream) if entry["message"] == "diff complete"]
        assert line["logger"] == "listdiff.api"
        assert line["mode"] == "local"
        assert line["trim_start"] == 1
        assert line["pid"] == os.getpid()


class TestMetricsHook:
    def test_noop_is_instance_of_protocol(self):
        assert isinstance(NoopMetricsHook(), MetricsHook)

    def test_recording_hook_is_instance_of_protocol(self, metrics):
        assert isinstance(metrics, MetricsHook)

    def test_partial_hook_is_not_instance(self):
        class PartialHook:
            def increment(self, name, value=1, tags=None):
                pass

        assert not isinstance(PartialHook(), MetricsHook)

    def test_noop_methods_return_none(self):
        hook = NoopMetricsHook()
        assert hook.increment("listdiff.diff_total") is None
        assert hook.timing("listdiff.diff_duration_ms", 1.5) is None
        assert hook.gauge("listdiff.table_cells", 3.0, tags={"mode": "local"}) is None

    def test_resolve_metrics(self, metrics):
        assert isinstance(resolve_metrics(None), NoopMetricsHook)
        assert resolve_metrics(metrics) is metrics
