# -*- coding: utf-8 -*-
"""Per-chain phase loads (pure).

DC loads are expressed as the AC power the rectifiers draw for them
(dc / efficiency) and spread evenly over the three phases.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Mapping, Optional

from core.calculations.classifier import classify
from core.models.power import (
    Chain,
    ChainLoad,
    ChainRoomContribution,
    OtherConsumerLoad,
    Rack,
    room_key,
)
from domain.topology import CHAIN_SOURCE_MAP, SourceMap

DEFAULT_EFFICIENCY_PCT = 96.0


def effective_efficiency_pct(efficiency_pct) -> float:
    try:
        e = float(efficiency_pct)
    except (TypeError, ValueError):
        return DEFAULT_EFFICIENCY_PCT
    if not math.isfinite(e) or e <= 0:
        return DEFAULT_EFFICIENCY_PCT
    return e


def dc_to_ac_equivalent(dc_kw: float, efficiency_pct) -> float:
    return float(dc_kw) / (effective_efficiency_pct(efficiency_pct) / 100.0)


def aggregate_chain(
    racks: Iterable[Rack],
    chain: Chain,
    consumer: Optional[OtherConsumerLoad],
    efficiency_pct=DEFAULT_EFFICIENCY_PCT,
    *,
    source_map: SourceMap = CHAIN_SOURCE_MAP,
) -> ChainLoad:
    """Phase loads of ``chain`` from rack feeds and its other consumers.

    ``by_room`` only lists rooms that received at least one matching feed;
    it is an explanation of the phase totals, not an extra load.
    """
    eff = effective_efficiency_pct(efficiency_pct)

    room_ac: Dict[str, list] = {}
    room_dc: Dict[str, float] = {}
    for rack in racks or []:
        room_name = room_key(rack.room)
        for feed in rack.feeds:
            cls = classify(feed.source, room_name, source_map)
            if cls.chain != chain:
                continue
            if cls.is_ac:
                acc = room_ac.setdefault(room_name, [0.0, 0.0, 0.0])
                acc[0] += feed.p1
                acc[1] += feed.p2
                acc[2] += feed.p3
                room_dc.setdefault(room_name, 0.0)
            if cls.is_dc:
                room_ac.setdefault(room_name, [0.0, 0.0, 0.0])
                room_dc[room_name] = room_dc.get(room_name, 0.0) + feed.dc

    p1 = p2 = p3 = 0.0
    by_room: Dict[str, ChainRoomContribution] = {}
    for room_name, ac in room_ac.items():
        dc = room_dc.get(room_name, 0.0)
        equiv = dc_to_ac_equivalent(dc, eff)
        by_room[room_name] = ChainRoomContribution(ac=float(sum(ac)), dc=float(dc), dc_ac_equivalent=float(equiv))
        p1 += ac[0] + equiv / 3.0
        p2 += ac[1] + equiv / 3.0
        p3 += ac[2] + equiv / 3.0

    if consumer is not None:
        equiv = dc_to_ac_equivalent(consumer.dc, eff)
        p1 += consumer.ac_p1 + equiv / 3.0
        p2 += consumer.ac_p2 + equiv / 3.0
        p3 += consumer.ac_p3 + equiv / 3.0

    return ChainLoad(chain=chain, phase1=float(p1), phase2=float(p2), phase3=float(p3), by_room=by_room)


def aggregate_chains(
    racks: Iterable[Rack],
    consumers: Optional[Mapping[Chain, OtherConsumerLoad]],
    efficiency_pct=DEFAULT_EFFICIENCY_PCT,
    *,
    source_map: SourceMap = CHAIN_SOURCE_MAP,
) -> Dict[Chain, ChainLoad]:
    rack_list = list(racks or [])
    cons = consumers or {}
    return {c: aggregate_chain(rack_list, c, cons.get(c), efficiency_pct, source_map=source_map) for c in Chain}
