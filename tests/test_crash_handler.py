# -*- coding: utf-8 -*-
import logging
import sys

from infra.crash_handler import install_global_exception_handlers, log_unhandled


def test_unhandled_exception_is_logged(caplog):
    try:
        raise ValueError("bad snapshot")
    except ValueError:
        exc_info = sys.exc_info()

    with caplog.at_level(logging.CRITICAL, logger="infra.crash_handler"):
        log_unhandled(*exc_info)

    rec = caplog.records[-1]
    assert rec.levelno == logging.CRITICAL
    assert rec.exc_info[0] is ValueError


def test_install_replaces_hooks(monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    import threading

    monkeypatch.setattr(threading, "excepthook", threading.excepthook)
    install_global_exception_handlers()
    assert sys.excepthook is log_unhandled
