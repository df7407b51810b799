# -*- coding: utf-8 -*-
"""Power compute service (pure, no UI dependencies).

One call = one pass over a PowerSnapshot: classification, room/row/chain
aggregation, failure simulation and utilization. The result is a plain,
JSON-serializable dict for presentation, reporting and export.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict

from core.calculations.chain_load import aggregate_chains, effective_efficiency_pct
from core.calculations.failure import simulate
from core.calculations.reports import dashboard_summary, rack_power_type
from core.calculations.room_row import aggregate_room, aggregate_rows
from core.calculations.utilization import (
    chain_capacity_per_phase,
    chain_phase_utilization,
    classify_utilization,
    rack_utilization,
    row_ac_utilization,
    row_dc_utilization,
    utilization_ratio,
)
from core.models.power import Chain, ChainLoad, PowerSnapshot, Room, room_key
from core.types import count_by_severity
from infra.perf import span
from services.validation_service import ValidationService

log = logging.getLogger(__name__)


def _as_serializable(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj):
        return _as_serializable(asdict(obj))
    if isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, dict):
        return {str(_as_serializable(k)): _as_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_as_serializable(v) for v in obj]
    # fallback: best effort
    return str(obj)


def _chain_view(load: ChainLoad, snapshot: PowerSnapshot) -> Dict[str, Any]:
    per_phase = chain_capacity_per_phase(load.chain, snapshot.capacities)
    return {
        "phases": [load.phase1, load.phase2, load.phase3],
        "total": load.total,
        "capacity_per_phase": per_phase,
        "utilization": [u.value for u in chain_phase_utilization(load, snapshot.capacities)],
        "ratio": [utilization_ratio(p, per_phase) for p in load.phases],
        "by_room": _as_serializable(load.by_room),
    }


class PowerComputeService:
    def __init__(self, validation: ValidationService | None = None) -> None:
        self._validation = validation or ValidationService()

    def compute(self, snapshot: PowerSnapshot) -> Dict[str, Any]:
        snap = snapshot or PowerSnapshot()
        with span("power.compute", racks=len(snap.racks)):
            result = self._compute(snap)
        log.debug(
            "Power compute done racks=%d failed=%s",
            len(snap.racks),
            ",".join(sorted(c.value for c in snap.failed_chains)) or "-",
        )
        return result

    def _compute(self, snap: PowerSnapshot) -> Dict[str, Any]:
        caps = snap.capacities
        eff = effective_efficiency_pct(snap.efficiency_pct)

        rooms: Dict[str, Any] = {}
        rows: Dict[str, Any] = {}
        for room in Room:
            load = aggregate_room(snap.racks, room)
            rooms[room.value] = {
                "ac": load.ac,
                "dc": load.dc,
                "total": load.total,
                "capacity": caps.room(room),
                "ratio": utilization_ratio(load.total, caps.room(room)),
                "utilization": classify_utilization(load.total, caps.room(room)).value,
            }
            room_rows: Dict[str, Any] = {}
            for row_id, rl in aggregate_rows(snap.racks, room).items():
                room_rows[row_id] = {
                    "ac_phases": [rl.ac_p1, rl.ac_p2, rl.ac_p3],
                    "ac_total": rl.ac_total,
                    "dc_total": rl.dc_total,
                    "rack_count": rl.rack_count,
                    "ac_utilization": row_ac_utilization(rl, caps).value,
                    "dc_utilization": row_dc_utilization(rl, caps).value,
                }
            rows[room.value] = room_rows

        nominal = aggregate_chains(snap.racks, snap.consumers, eff)
        sim = simulate(snap.racks, snap.consumers, snap.failed_chains)
        effective = aggregate_chains(sim.racks, sim.consumers, eff) if snap.failed_chains else nominal

        racks = [
            {
                "room": room_key(r.room),
                "rack_id": r.rack_id,
                "row": r.row,
                "power": r.total_power,
                "capacity": r.pdu_power,
                "ratio": utilization_ratio(r.total_power, r.pdu_power),
                "utilization": rack_utilization(r).value,
                "power_type": rack_power_type(r),
            }
            for r in snap.racks
        ]

        issues = self._validation.validate(snap)

        return {
            "efficiency_pct": eff,
            "failed_chains": sorted(c.value for c in snap.failed_chains),
            "rooms": rooms,
            "rows": rows,
            "chains": {c.value: _chain_view(effective[c], snap) for c in Chain},
            "chains_nominal": {c.value: _chain_view(nominal[c], snap) for c in Chain},
            "simulated_consumers": _as_serializable({c.value: v for c, v in sim.consumers.items()}),
            "racks": racks,
            "summary": dashboard_summary(snap.racks, snap.consumers),
            "issues": [it.to_dict() for it in issues],
            "issue_counts": count_by_severity(issues),
        }
