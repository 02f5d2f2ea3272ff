from __future__ import annotations

import logging

import pytest

from truckload.core import flow_logging
from truckload.core.config import _env_flag, _env_int, settings
from truckload.crud.shipment_store import InMemoryShipmentStore
from truckload.main import build_store


@pytest.mark.parametrize(
    "raw, default, expected",
    [(None, True, True), ("", False, False), ("yes", False, True), ("0", True, False), ("off", True, False)],
)
def test_env_flag(monkeypatch, raw, default, expected):
    if raw is None:
        monkeypatch.delenv("TRUCKLOAD_TEST_FLAG", raising=False)
    else:
        monkeypatch.setenv("TRUCKLOAD_TEST_FLAG", raw)

    assert _env_flag("TRUCKLOAD_TEST_FLAG", default) is expected


def test_env_int_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("TRUCKLOAD_TEST_INT", " 12 ")
    assert _env_int("TRUCKLOAD_TEST_INT", 1) == 12

    monkeypatch.setenv("TRUCKLOAD_TEST_INT", "twelve")
    assert _env_int("TRUCKLOAD_TEST_INT", 1) == 1

    monkeypatch.delenv("TRUCKLOAD_TEST_INT")
    assert _env_int("TRUCKLOAD_TEST_INT", 7) == 7


def test_cors_origins_split(monkeypatch):
    monkeypatch.setattr(settings, "CORS_ALLOW_ORIGINS", " http://a.example, ,http://b.example ")

    assert settings.cors_origins() == ["http://a.example", "http://b.example"]


def test_build_store_memory_and_unknown():
    assert isinstance(build_store("memory"), InMemoryShipmentStore)
    with pytest.raises(ValueError):
        build_store("redis")


def test_flow_logs_respect_category_switches(monkeypatch, caplog):
    logger = logging.getLogger("truckload.tests.flow")
    monkeypatch.setattr(settings, "FLOW_LOGS_ENABLED", True)
    monkeypatch.setattr(settings, "FLOW_LOGS_EXPORT_ENABLED", False)

    with caplog.at_level(logging.INFO, logger="truckload.tests.flow"):
        flow_logging.flow_info(logger, "export_line", category="export")
        flow_logging.flow_info(logger, "ingestion_line", category="ingestion")

    messages = [r.getMessage() for r in caplog.records]
    assert "export_line" not in messages
    assert "ingestion_line" in messages


def test_flow_logs_master_switch(monkeypatch, caplog):
    logger = logging.getLogger("truckload.tests.flow")
    monkeypatch.setattr(settings, "FLOW_LOGS_ENABLED", False)

    with caplog.at_level(logging.INFO, logger="truckload.tests.flow"):
        flow_logging.flow_info(logger, "anything")

    assert caplog.records == []
