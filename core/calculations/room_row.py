# -*- coding: utf-8 -*-
"""Room and row load totals (pure).

Only feeds whose label resolves to a panel/rectifier of a chain serving the
rack's room are counted. Summation is order-independent.
"""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

from core.calculations.classifier import classify
from core.models.power import Rack, Room, RoomLoad, RowLoad, room_key
from domain.topology import CHAIN_SOURCE_MAP, ROW_IDS, SourceMap


def _row_key(row) -> str:
    return str(row or "").strip().upper()


def _in_room(rack: Rack, room) -> bool:
    return room_key(rack.room) == room_key(room) and Room.parse(room_key(room)) is not None


def aggregate_room(racks: Iterable[Rack], room, *, source_map: SourceMap = CHAIN_SOURCE_MAP) -> RoomLoad:
    ac = 0.0
    dc = 0.0
    for rack in racks or []:
        if not _in_room(rack, room):
            continue
        for feed in rack.feeds:
            cls = classify(feed.source, room_key(room), source_map)
            if cls.is_ac:
                ac += feed.p1 + feed.p2 + feed.p3
            if cls.is_dc:
                dc += feed.dc
    return RoomLoad(ac=float(ac), dc=float(dc))


def aggregate_row(racks: Iterable[Rack], room, row_id, *, source_map: SourceMap = CHAIN_SOURCE_MAP) -> RowLoad:
    """Per-phase AC and DC totals of one row.

    Racks with a blank row are never part of a row.
    """
    target = _row_key(row_id)
    if not target:
        return RowLoad()
    p1 = p2 = p3 = dc = 0.0
    count = 0
    for rack in racks or []:
        if not _in_room(rack, room) or _row_key(rack.row) != target:
            continue
        count += 1
        for feed in rack.feeds:
            cls = classify(feed.source, room_key(room), source_map)
            if cls.is_ac:
                p1 += feed.p1
                p2 += feed.p2
                p3 += feed.p3
            if cls.is_dc:
                dc += feed.dc
    return RowLoad(ac_p1=float(p1), ac_p2=float(p2), ac_p3=float(p3), dc_total=float(dc), rack_count=count)


def aggregate_rows(
    racks: Iterable[Rack],
    room,
    row_ids: Sequence[str] = ROW_IDS,
    *,
    source_map: SourceMap = CHAIN_SOURCE_MAP,
) -> Dict[str, RowLoad]:
    rack_list = list(racks or [])
    return {str(r): aggregate_row(rack_list, room, r, source_map=source_map) for r in row_ids}


def aggregate_rooms(racks: Iterable[Rack], *, source_map: SourceMap = CHAIN_SOURCE_MAP) -> Dict[Room, RoomLoad]:
    rack_list = list(racks or [])
    return {room: aggregate_room(rack_list, room, source_map=source_map) for room in Room}
