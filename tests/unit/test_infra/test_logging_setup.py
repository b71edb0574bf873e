"""Tests for the JSON formatter and lazy logger."""

from __future__ import annotations

import json
import logging

from catalog_service.infra.logging import JSONFormatter, get_lazy_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="catalog_service.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Product %s",
        args=("created",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_one_object_with_extras():
    formatter = JSONFormatter(static={"service": "catalog-service"})

    line = formatter.format(_record(product_id=42))
    data = json.loads(line)

    assert data["message"] == "Product created"
    assert data["level"] == "INFO"
    assert data["logger"] == "catalog_service.test"
    assert data["service"] == "catalog-service"
    assert data["product_id"] == 42
    assert data["timestamp"].endswith("Z")
    assert "trace_id" not in data


def test_lazy_logger_skips_disabled_levels():
    calls: list[str] = []
    lazy = get_lazy_logger("catalog_service.test.lazy")
    lazy.logger.setLevel(logging.INFO)

    lazy.debug(lambda: calls.append("built") or "expensive")

    assert calls == []


def test_lazy_logger_evaluates_enabled_levels(caplog):
    lazy = get_lazy_logger("catalog_service.test.lazy2")

    with caplog.at_level(logging.DEBUG, logger="catalog_service.test.lazy2"):
        lazy.debug(lambda: "page fetched")

    assert "page fetched" in caplog.text
