# -*- coding: utf-8 -*-
"""
Where RackPower reads and writes on disk.

- ``app_root()``: the source checkout (version.json lives there).
- ``user_data_dir()``: per-user writable folder for settings and logs.
  ``RACKPOWER_HOME`` replaces it entirely (tests, shared installs).
"""
from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "RackPower"
HOME_ENV = "RACKPOWER_HOME"
SETTINGS_FILENAME = "rackpower_settings.json"


def app_root() -> Path:
    return Path(__file__).resolve().parents[1]


def ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p


def user_data_dir() -> Path:
    override = os.getenv(HOME_ENV, "").strip()
    if override:
        return ensure_dir(Path(override))
    # LOCALAPPDATA first: settings are machine-local, not roaming
    base = os.getenv("LOCALAPPDATA") or os.getenv("APPDATA") or str(Path.home())
    return ensure_dir(Path(base) / APP_NAME)


def logs_dir() -> Path:
    return ensure_dir(user_data_dir() / "logs")


def settings_file() -> Path:
    return user_data_dir() / SETTINGS_FILENAME
