import json
import logging
import sys

import pytest

from cacheman import config as config_module
from cacheman.logging_config import JSONFormatter, init_logging
from cacheman.metrics import cache_hits, export_metrics
from cacheman.tracer import configure_tracing, start_span_async


def test_bool_env_parsing(monkeypatch):
    monkeypatch.setenv("CACHEMAN_LOG_JSON", "no")
    monkeypatch.setenv("CACHEMAN_TRACING", "Yes")
    monkeypatch.setenv("CACHEMAN_DEFAULT_TIMEOUT_MS", "5000")
    cfg = config_module.load_config()
    assert cfg.LOG_JSON is False
    assert cfg.TRACING is True
    assert cfg.DEFAULT_TIMEOUT_MS == 5000


def test_config_defaults(monkeypatch):
    for name in ("CACHEMAN_DEFAULT_TIMEOUT_MS", "CACHEMAN_LOG_LEVEL", "CACHEMAN_LOG_JSON", "CACHEMAN_TRACING"):
        monkeypatch.delenv(name, raising=False)
    cfg = config_module.load_config()
    assert cfg.DEFAULT_TIMEOUT_MS == 120000
    assert cfg.LOG_LEVEL == "INFO"
    assert cfg.LOG_JSON is True
    assert cfg.TRACING is False


def test_json_formatter_includes_extras():
    record = logging.LogRecord("cacheman.cache", logging.WARNING, __file__, 1, "upstream fetch failed", None, None)
    record.cache = "profile"
    record.event = "fetch-fail"
    record.obj = object()
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["msg"] == "upstream fetch failed"
    assert payload["cache"] == "profile"
    assert payload["event"] == "fetch-fail"
    assert payload["ts"].endswith("Z")
    # non-serializable extras fall back to str()
    assert isinstance(payload["obj"], str)


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc"]


def test_init_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        init_logging("debug", json_output=True)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_export_metrics():
    cache_hits.labels("export-test").inc()
    body = export_metrics().decode()
    assert 'cacheman_hits_total{cache="export-test"} 1.0' in body


@pytest.mark.asyncio
async def test_tracing_disabled_by_default():
    assert configure_tracing(False) is False
    async with start_span_async("cacheman.test", cache="x"):
        pass
