# -*- coding: utf-8 -*-
"""
Logging setup: app log in user space plus stderr, optional perf log.

Both init functions are idempotent: a second call with the same file does
not add handlers.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from infra.paths import logs_dir

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PERF_LOGGER = "rackpower.perf"


def _file_handler_for(logger: logging.Logger, log_path: Path) -> Optional[logging.FileHandler]:
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == str(log_path):
            return h
    return None


def _attach_file(logger: logging.Logger, log_path: Path, level: int) -> None:
    if _file_handler_for(logger, log_path) is not None:
        return
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(fh)


def init_logging(filename: str = "app.log", level: int = logging.INFO, log_dir: Optional[Path] = None) -> Path:
    """Root logger -> <user data>/logs/app.log and stderr."""
    log_path = (log_dir or logs_dir()) / filename
    root = logging.getLogger()
    root.setLevel(level)
    if _file_handler_for(root, log_path) is None:
        _attach_file(root, log_path, level)
        sh = logging.StreamHandler()
        sh.setLevel(max(level, logging.WARNING))
        sh.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(sh)
    return log_path


def init_perf_logging(filename: str = "perf.log", log_dir: Optional[Path] = None) -> Path:
    """Dedicated file for compute timings (infra.perf.span)."""
    log_path = (log_dir or logs_dir()) / filename
    logger = logging.getLogger(PERF_LOGGER)
    logger.setLevel(logging.INFO)
    _attach_file(logger, log_path, logging.INFO)
    return log_path
