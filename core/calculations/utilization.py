# -*- coding: utf-8 -*-
"""Utilization bands (pure).

- capacity <= 0          -> none (not computable)
- load/capacity >= 0.9   -> critical
- load/capacity >= 0.8   -> warning
- load/capacity >  0     -> normal
- otherwise              -> none
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from core.models.power import Capacities, Chain, ChainLoad, Rack, RoomLoad, RowLoad, Utilization

WARNING_RATIO = 0.8
CRITICAL_RATIO = 0.9


def utilization_ratio(load, capacity) -> Optional[float]:
    try:
        lo = float(load)
        cap = float(capacity)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lo) and math.isfinite(cap)) or cap <= 0:
        return None
    return lo / cap


def classify_utilization(load, capacity) -> Utilization:
    ratio = utilization_ratio(load, capacity)
    if ratio is None:
        return Utilization.NONE
    if ratio >= CRITICAL_RATIO:
        return Utilization.CRITICAL
    if ratio >= WARNING_RATIO:
        return Utilization.WARNING
    if ratio > 0:
        return Utilization.NORMAL
    return Utilization.NONE


def rack_utilization(rack: Rack) -> Utilization:
    return classify_utilization(rack.total_power, rack.pdu_power)


def room_utilization(load: RoomLoad, room, capacities: Capacities) -> Utilization:
    return classify_utilization(load.total, capacities.room(room))


def row_ac_utilization(load: RowLoad, capacities: Capacities) -> Utilization:
    # row AC capacity is three-phase, compared per phase
    return classify_utilization(load.max_phase, capacities.row_ac / 3.0)


def row_dc_utilization(load: RowLoad, capacities: Capacities) -> Utilization:
    return classify_utilization(load.dc_total, capacities.row_dc)


def chain_capacity_per_phase(chain: Chain, capacities: Capacities) -> float:
    return capacities.chain(chain) / 3.0


def chain_phase_utilization(load: ChainLoad, capacities: Capacities) -> Tuple[Utilization, Utilization, Utilization]:
    per_phase = chain_capacity_per_phase(load.chain, capacities)
    return tuple(classify_utilization(p, per_phase) for p in load.phases)  # type: ignore[return-value]


def worst(levels) -> Utilization:
    """Most severe band of an iterable of utilizations."""
    order = [Utilization.NONE, Utilization.NORMAL, Utilization.WARNING, Utilization.CRITICAL]
    best = Utilization.NONE
    for lv in levels or []:
        if order.index(lv) > order.index(best):
            best = lv
    return best
