# -*- coding: utf-8 -*-
import logging

from infra.perf import is_enabled, span


def test_disabled_span_measures_nothing(monkeypatch):
    monkeypatch.delenv("RACKPOWER_PERF", raising=False)
    assert is_enabled() is False
    with span("power.compute") as t:
        pass
    assert t.elapsed_ms is None


def test_enabled_span_logs(monkeypatch, caplog):
    monkeypatch.setenv("RACKPOWER_PERF", "yes")
    with caplog.at_level(logging.INFO, logger="rackpower.perf"):
        with span("power.compute", threshold_ms=0.0, racks=3) as t:
            pass
    assert t.elapsed_ms is not None
    assert "PERF power.compute" in caplog.text
    assert "racks=3" in caplog.text
