from __future__ import annotations

import json
import logging

from bedgate.core.logging import JsonFormatter, LogContext, configure_logging, with_context


def _record(logger: logging.Logger, capture: list[logging.LogRecord]) -> None:
    class _Capture(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            capture.append(record)

    logger.addHandler(_Capture())
    logger.setLevel(logging.INFO)
    logger.propagate = False


def test_json_formatter_includes_extra_and_context() -> None:
    records: list[logging.LogRecord] = []
    logger = logging.getLogger("bedgate.test.logging")
    _record(logger, records)

    adapter = with_context(logger, LogContext(provider="bedrock-runtime", model="us.amazon.nova-pro-v1:0"))
    adapter.info("bedrock.stream.done", extra={"status": "ok", "latency_ms": 12})

    line = json.loads(JsonFormatter().format(records[-1]))
    assert line["msg"] == "bedrock.stream.done"
    assert line["level"] == "INFO"
    assert line["status"] == "ok"
    assert line["latency_ms"] == 12
    assert line["provider"] == "bedrock-runtime"
    assert line["model"] == "us.amazon.nova-pro-v1:0"
    assert "request_id" not in line


def test_json_formatter_renders_exceptions() -> None:
    records: list[logging.LogRecord] = []
    logger = logging.getLogger("bedgate.test.logging.exc")
    _record(logger, records)

    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception("bedrock.stream.error")

    line = json.loads(JsonFormatter().format(records[-1]))
    assert line["level"] == "ERROR"
    assert "ValueError: boom" in line["exc"]


def test_configure_logging_installs_single_json_handler() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging(level="DEBUG")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
