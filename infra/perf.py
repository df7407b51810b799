# -*- coding: utf-8 -*-
"""Compute timings.

Switched on with the environment variable ``RACKPOWER_PERF`` (1/true/yes/on),
read at each call so a shell export takes effect without a restart. Timings
go to logger ``rackpower.perf`` (see infra.logging_setup.init_perf_logging).
"""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional

log = logging.getLogger("rackpower.perf")

_TRUTHY = ("1", "true", "yes", "on")


def is_enabled() -> bool:
    return os.environ.get("RACKPOWER_PERF", "").strip().lower() in _TRUTHY


@dataclass
class Timing:
    label: str
    elapsed_ms: Optional[float] = None


@contextmanager
def span(label: str, *, threshold_ms: float = 5.0, **fields: Any) -> Iterator[Timing]:
    """Time the block; log ``label`` and ``fields`` when slower than threshold.

    The yielded Timing is only filled in when perf is enabled.
    """
    timing = Timing(label)
    if not is_enabled():
        yield timing
        return
    t0 = time.perf_counter()
    try:
        yield timing
    finally:
        timing.elapsed_ms = (time.perf_counter() - t0) * 1000.0
        if timing.elapsed_ms >= float(threshold_ms or 0.0):
            extra = " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
            log.info("PERF %s %.1fms %s", label, timing.elapsed_ms, extra)
