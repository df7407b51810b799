# -*- coding: utf-8 -*-
"""
Process start for every command:
- logging (app.log + stderr, perf.log when RACKPOWER_PERF is set)
- user settings file created or repaired
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from infra.logging_setup import init_logging, init_perf_logging
from infra.paths import settings_file
from infra.perf import is_enabled as perf_enabled
from infra.settings import load_settings

log = logging.getLogger(__name__)


def bootstrap(level: int = logging.INFO) -> Dict[str, Any]:
    log_path = init_logging(level=level)
    if perf_enabled():
        init_perf_logging()
    settings = load_settings()
    log.debug("Bootstrap done log=%s settings=%s", log_path, settings_file())
    return settings
