# -*- coding: utf-8 -*-
"""Validations for rack records and their feed labels."""

from __future__ import annotations

from typing import Iterable, List, Set, Tuple

from core.calculations.classifier import classify
from core.models.power import Rack, Room, room_key
from core.types import Issue, Severity
from domain.topology import CHAIN_SOURCE_MAP, ROOM_CHAINS, SourceMap


def _feed_issues(rack: Rack, room: Room, idx: int, ctx: str, source_map: SourceMap) -> List[Issue]:
    issues: List[Issue] = []
    feed = rack.feed1 if idx == 1 else rack.feed2
    label = str(feed.source or "").strip()
    if not label:
        if feed.total > 0:
            issues.append(Issue(code="FEED_SOURCE_MISSING", message=f"{ctx}: voie {idx} has load but no source label.", severity=Severity.WARNING, context=ctx))
        return issues

    cls = classify(label, room, source_map)
    if cls.chain is None:
        issues.append(Issue(code="FEED_SOURCE_UNRECOGNIZED", message=f"{ctx}: no chain letter in voie {idx} source '{label}'.", severity=Severity.WARNING, context=ctx))
    elif cls.chain not in ROOM_CHAINS.get(room, ()):
        issues.append(Issue(code="FEED_CHAIN_NOT_IN_ROOM", message=f"{ctx}: chain {cls.chain.value} does not serve {room.value} (voie {idx} '{label}').", severity=Severity.WARNING, context=ctx))
    elif cls.kind is None:
        issues.append(Issue(code="FEED_SOURCE_UNMATCHED", message=f"{ctx}: voie {idx} source '{label}' matches no panel or rectifier of {room.value}.", severity=Severity.WARNING, context=ctx))
    elif cls.is_ac and cls.is_dc:
        issues.append(Issue(code="FEED_SOURCE_MIXED", message=f"{ctx}: voie {idx} source '{label}' matches both an AC panel and a rectifier.", severity=Severity.INFO, context=ctx))
    return issues


def validate_racks(racks: Iterable[Rack], *, source_map: SourceMap = CHAIN_SOURCE_MAP) -> List[Issue]:
    issues: List[Issue] = []
    seen: Set[Tuple[str, str]] = set()

    for rack in racks or []:
        ctx = f"{room_key(rack.room)}/{rack.rack_id}"
        if rack.key in seen:
            issues.append(Issue(code="RACK_DUPLICATE", message=f"Rack '{rack.rack_id}' appears more than once in room '{room_key(rack.room)}'.", severity=Severity.ERROR, context=ctx))
        seen.add(rack.key)

        room = Room.parse(rack.room)
        if room is None:
            issues.append(Issue(code="RACK_ROOM_UNKNOWN", message=f"{ctx}: unknown room, rack is left out of room and chain totals.", severity=Severity.WARNING, context=ctx))

        if not str(rack.row or "").strip():
            issues.append(Issue(code="RACK_ROW_MISSING", message=f"{ctx}: no row assigned, rack is left out of row totals.", severity=Severity.INFO, context=ctx))

        if rack.pdu_power <= 0:
            issues.append(Issue(code="RACK_PDU_MISSING", message=f"{ctx}: PDU power unknown, utilization not computed.", severity=Severity.INFO, context=ctx))

        if any(v < 0 for f in rack.feeds for v in (f.p1, f.p2, f.p3, f.dc)):
            issues.append(Issue(code="RACK_NEGATIVE_LOAD", message=f"{ctx}: negative power reading.", severity=Severity.WARNING, context=ctx))

        if room is not None:
            issues.extend(_feed_issues(rack, room, 1, ctx, source_map))
            issues.extend(_feed_issues(rack, room, 2, ctx, source_map))

    return issues
