# -*- coding: utf-8 -*-
"""Validations for capacity limits and calculation settings."""

from __future__ import annotations

import math
from typing import List

from core.keys import CAPACITY_FIELDS, CAPACITY_LABELS
from core.models.power import Capacities
from core.types import Issue, Severity


def validate_capacities(capacities: Capacities) -> List[Issue]:
    issues: List[Issue] = []
    for key, attr in CAPACITY_FIELDS.items():
        v = float(getattr(capacities, attr, 0.0) or 0.0)
        if v <= 0:
            label = CAPACITY_LABELS.get(key, key)
            issues.append(Issue(code="CAP_NOT_POSITIVE", message=f"{label} must be greater than 0 kW; utilization for it is not computed.", severity=Severity.WARNING, context=key))
    return issues


def validate_efficiency(efficiency_pct) -> List[Issue]:
    try:
        e = float(efficiency_pct)
    except (TypeError, ValueError):
        e = float("nan")
    if not math.isfinite(e) or e <= 0:
        return [Issue(code="EFFICIENCY_INVALID", message="Rectifier efficiency must be greater than 0 %; 96 % is used.", severity=Severity.WARNING, context="efficiency")]
    if e > 100:
        return [Issue(code="EFFICIENCY_ABOVE_100", message="Rectifier efficiency above 100 % makes DC loads look smaller than they are.", severity=Severity.WARNING, context="efficiency")]
    return []
