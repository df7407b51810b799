# -*- coding: utf-8 -*-

"""Pytest configuration.

The top-level folders (core/, domain/, services/, ...) are imported by name,
so the repository root goes on sys.path whether or not the project is
installed. Every test gets its own RACKPOWER_HOME so settings and logs never
touch the real user folder.
"""

from __future__ import annotations

import logging
import os
import sys

import pytest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


@pytest.fixture(autouse=True)
def rackpower_home(tmp_path, monkeypatch):
    home = tmp_path / "rackpower_home"
    monkeypatch.setenv("RACKPOWER_HOME", str(home))
    return home


@pytest.fixture
def restore_root_logging():
    """Undo handlers/level added by init_logging during a test."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
