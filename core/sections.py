# -*- coding: utf-8 -*-
"""Input section keys (single source of truth).

Each section is one independently edited part of a PowerSnapshot. They are
used by:
- app.events InputChanged(section)
- services.compute orchestrators (dirty tracking)
- services.validation_service (which validators to run)
"""

from __future__ import annotations

from enum import Enum


class Section(str, Enum):
    RACKS = "racks"
    CONSUMERS = "consumers"
    CAPACITIES = "capacities"
    FAILURES = "failures"
    EFFICIENCY = "efficiency"

    # synthetic events
    SNAPSHOT_LOADED = "snapshot_loaded"
