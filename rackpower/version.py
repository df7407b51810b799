# -*- coding: utf-8 -*-
"""Version lookup.

Installed builds report the distribution metadata; source checkouts read
``version.json`` at the repository root.
"""

from __future__ import annotations

import json
from importlib import metadata

from infra.paths import app_root

_DIST_NAME = "rackpower"
_UNKNOWN = "0.0.0"


def _from_version_json() -> str:
    try:
        data = json.loads((app_root() / "version.json").read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return _UNKNOWN
    return str(data.get("semver") or _UNKNOWN)


def get_version() -> str:
    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return _from_version_json()


__version__ = get_version()
