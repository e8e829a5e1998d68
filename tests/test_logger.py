import json
import logging

from dynamic_logging import (
    DynamicThresholdConfig,
    LoggingFilterAdapter,
    StructuredFormatter,
    context,
    get_filter,
    get_logger,
    log_with_context,
    request_context,
    set_default_config,
)


def request_config(**kwargs):
    options = dict(
        key="reqId",
        thresholds=[("req-42", "WARN")],
        default_threshold="ERROR",
        on_match="ACCEPT",
        on_mismatch="DENY",
    )
    options.update(kwargs)
    return DynamicThresholdConfig(**options)


def test_get_logger():
    set_default_config(DynamicThresholdConfig())
    logger = get_logger("test_dynamic_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_dynamic_logger"
    assert logger.level == logging.DEBUG
    assert logger.filters == []


def test_get_logger_attaches_filter():
    config = request_config(log_level="INFO")
    logger = get_logger("test_dynamic_filtered_logger", config)
    assert logger.level == logging.INFO
    adapters = [f for f in logger.filters if isinstance(f, LoggingFilterAdapter)]
    assert len(adapters) == 1
    assert adapters[0].log_filter is get_filter(config)


def test_get_filter_cached_per_config():
    config = request_config()
    assert get_filter(config) is get_filter(config)
    assert get_filter(request_config(enabled=False)) is None


def test_log_with_context(caplog):
    config = request_config()
    logger = get_logger("test_dynamic_context_logger", config)

    with caplog.at_level(logging.DEBUG, logger="test_dynamic_context_logger"):
        with request_context(request_id="r-1", reqId="req-42"):
            assert log_with_context(logger, "info", "dropped", config) is False
            assert log_with_context(logger, "warning", "kept", config, extra_field="x") is True

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.getMessage() == "kept"
    assert record.ctx_reqId == "req-42"
    assert record.ctx_request_id == "r-1"
    assert record.ctx_extra_field == "x"


def test_log_with_context_extra_selects_threshold(caplog):
    config = request_config()
    logger = get_logger("test_dynamic_extra_logger", config)

    with caplog.at_level(logging.DEBUG, logger="test_dynamic_extra_logger"):
        assert log_with_context(logger, "info", "no key", config) is True
        assert log_with_context(logger, "info", "denied", config, reqId="req-99") is False
        assert log_with_context(logger, "error", "default", config, reqId="req-99") is True

    assert [r.getMessage() for r in caplog.records] == ["no key", "default"]


def test_log_filtering_none_values(caplog):
    config = request_config(enabled=False)
    logger = get_logger("test_dynamic_none_logger", config)
    context.put("tenant", None)

    with caplog.at_level(logging.INFO, logger="test_dynamic_none_logger"):
        log_with_context(logger, "info", "message", config, empty=None, kept="v")

    record = caplog.records[0]
    assert not hasattr(record, "ctx_tenant")
    assert not hasattr(record, "ctx_empty")
    assert record.ctx_kept == "v"


def test_structured_formatter():
    formatter = StructuredFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.WARNING,
        pathname="",
        lineno=0,
        msg="user %s",
        args=("bob",),
        exc_info=None,
    )
    record.ctx_reqId = "req-42"

    entry = json.loads(formatter.format(record))
    assert entry["level"] == "WARNING"
    assert entry["logger"] == "test"
    assert entry["message"] == "user bob"
    assert entry["reqId"] == "req-42"
    assert entry["timestamp"].endswith("Z")


def test_structured_formatter_without_timestamp():
    formatter = StructuredFormatter(include_timestamp=False)
    record = logging.LogRecord("test", logging.INFO, "", 0, "msg", (), None)
    assert "timestamp" not in json.loads(formatter.format(record))
