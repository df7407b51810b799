# -*- coding: utf-8 -*-
"""Rack listings and dashboard figures (pure).

These work on raw rack readings (no feed classification): they answer
"how much does this rack draw", not "which chain carries it".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from core.calculations.utilization import WARNING_RATIO, classify_utilization, utilization_ratio
from core.models.power import Chain, OtherConsumerLoad, Rack, Room, Utilization, room_key


@dataclass(frozen=True)
class HighPowerRow:
    room: str
    rack_id: str
    owner: str
    power: float
    capacity: float
    ratio: float


@dataclass(frozen=True)
class OwnerPowerRow:
    owner: str
    power: float
    rack_count: int


@dataclass(frozen=True)
class InventoryRow:
    room: str
    row: str
    rack_id: str
    designation: str
    owner: str
    power: float


def rack_total_power(rack: Rack) -> float:
    return rack.total_power


def _has_ac(rack: Rack) -> bool:
    readings = any(p > 0 for f in rack.feeds for p in (f.p1, f.p2, f.p3))
    text = f"{rack.supply} {rack.phase}".lower()
    return readings or "tri" in text or "mono" in text


def _is_three_phase(rack: Rack) -> bool:
    return "tri" in str(rack.supply or "").lower() or "tri" in str(rack.phase or "").lower()


def rack_power_type(rack: Rack) -> str:
    if str(rack.supply or "") == "RIEN":
        return "A définir"
    has_dc = rack.feed1.dc > 0 or rack.feed2.dc > 0
    has_ac = _has_ac(rack)
    if has_dc and has_ac:
        return "DC + AC"
    if has_dc:
        return "DC"
    if has_ac:
        return "AC-TRI" if _is_three_phase(rack) else "AC-MONO"
    return "N/A"


def rack_phase_utilization(rack: Rack) -> Utilization:
    """Three-phase racks: worst single phase of both feeds vs PDU/3.

    Other racks use the total load against the PDU rating.
    """
    if _is_three_phase(rack):
        phases = [p for f in rack.feeds for p in (f.p1, f.p2, f.p3)]
        return classify_utilization(max(phases), rack.pdu_power / 3.0)
    return classify_utilization(rack.total_power, rack.pdu_power)


def high_power_racks(racks: Iterable[Rack]) -> List[HighPowerRow]:
    """Racks drawing strictly more than 80 % of their PDU rating."""
    out: List[HighPowerRow] = []
    for r in racks or []:
        ratio = utilization_ratio(r.total_power, r.pdu_power)
        if ratio is None or ratio <= WARNING_RATIO:
            continue
        out.append(HighPowerRow(
            room=room_key(r.room), rack_id=str(r.rack_id), owner=str(r.owner or ""),
            power=r.total_power, capacity=float(r.pdu_power), ratio=float(ratio),
        ))
    out.sort(key=lambda h: (-h.ratio, h.room, h.rack_id))
    return out


def power_by_owner(racks: Iterable[Rack]) -> List[OwnerPowerRow]:
    acc: Dict[str, List[float]] = {}
    for r in racks or []:
        owner = str(r.owner or "").strip() or "N/A"
        item = acc.setdefault(owner, [0.0, 0])
        item[0] += r.total_power
        item[1] += 1
    rows = [OwnerPowerRow(owner=k, power=float(v[0]), rack_count=int(v[1])) for k, v in acc.items()]
    rows.sort(key=lambda x: (-x.power, x.owner))
    return rows


def _natural_key(s: str) -> Tuple:
    parts = re.split(r"(\d+)", str(s or ""))
    return tuple((0, int(p)) if p.isdigit() else (1, p.lower()) for p in parts if p != "")


def inventory(racks: Iterable[Rack]) -> List[InventoryRow]:
    ordered = sorted(
        racks or [],
        key=lambda r: (room_key(r.room), str(r.row or ""), _natural_key(r.rack_id)),
    )
    return [
        InventoryRow(
            room=room_key(r.room), row=str(r.row or ""), rack_id=str(r.rack_id),
            designation=str(r.designation or ""), owner=str(r.owner or ""), power=r.total_power,
        )
        for r in ordered
    ]


def dashboard_summary(
    racks: Iterable[Rack],
    consumers: Optional[Mapping[Chain, OtherConsumerLoad]] = None,
) -> Dict[str, object]:
    rack_list = list(racks or [])
    cons = list((consumers or {}).values())

    total_rack = sum(r.total_power for r in rack_list)
    other_ac = sum(c.ac_total for c in cons)
    other_dc = sum(c.dc for c in cons)

    by_room: Dict[str, Dict[str, float]] = {room.value: {"ac": 0.0, "dc": 0.0, "total": 0.0} for room in Room}
    for r in rack_list:
        room = Room.parse(r.room)
        if room is None:
            continue
        ac = r.feed1.ac_total + r.feed2.ac_total
        dc = r.feed1.dc + r.feed2.dc
        slot = by_room[room.value]
        slot["ac"] += ac
        slot["dc"] += dc
        slot["total"] += ac + dc

    return {
        "rack_count": len(rack_list),
        "rack_power": float(total_rack),
        "other_consumers_ac": float(other_ac),
        "other_consumers_dc": float(other_dc),
        "other_consumers_power": float(other_ac + other_dc),
        "total_power": float(total_rack + other_ac + other_dc),
        "by_room": by_room,
        "high_power_count": len(high_power_racks(rack_list)),
    }
