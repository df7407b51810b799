# -*- coding: utf-8 -*-
"""Snapshot JSON I/O helpers.

A snapshot file holds one complete computation input:

    {
      "racks": [ {"Salle": "ITN1", "Rack": "A01", ...}, ... ],
      "otherConsumers": [ {"chain": "A", "acP1": 8.28, ...}, ... ],
      "capacities": {"UPS_A_kW": 1000, ...},
      "failedChains": ["A"],
      "efficiency": 96
    }

Rack rows use the sheet column names and go through domain.normalize, so a
dump of the remote sheet can be loaded as is.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.keys import SnapshotKeys as K
from core.models.power import Capacities, Chain, PowerSnapshot
from domain.normalize import consumers_from_rows, consumers_to_rows, rack_to_record, racks_from_records
from domain.parse import to_float
from infra.settings import DEFAULT_CONSUMERS, DEFAULT_EFFICIENCY_PCT, capacities_from_dict, capacities_to_dict

log = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Snapshot file missing, unreadable or not a snapshot."""


def snapshot_from_dict(data: Dict[str, Any], *, base_capacities: Optional[Capacities] = None) -> PowerSnapshot:
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object.")

    records = data.get(K.RACKS) or []
    if not isinstance(records, list):
        raise SnapshotError(f"'{K.RACKS}' must be a list of records.")
    racks = racks_from_records(records)
    dropped = len(records) - len(racks)
    if dropped:
        log.info("Snapshot: %d rack rows skipped or merged (no room/rack id, or a later row for the same rack).", dropped)

    consumer_rows = data.get(K.OTHER_CONSUMERS)
    consumers = consumers_from_rows(consumer_rows if isinstance(consumer_rows, list) else [])
    if consumers is None:
        consumers = dict(DEFAULT_CONSUMERS)

    caps_raw = data.get(K.CAPACITIES)
    capacities = capacities_from_dict(caps_raw if isinstance(caps_raw, dict) else {}, base=base_capacities)

    failed = frozenset(
        c for c in (Chain.parse(x) for x in (data.get(K.FAILED_CHAINS) or [])) if c is not None
    )

    eff = to_float(data.get(K.EFFICIENCY), default=DEFAULT_EFFICIENCY_PCT)

    return PowerSnapshot(
        racks=tuple(racks),
        consumers=consumers,
        capacities=capacities,
        failed_chains=failed,
        efficiency_pct=float(eff if eff is not None else DEFAULT_EFFICIENCY_PCT),
    )


def snapshot_to_dict(snapshot: PowerSnapshot) -> Dict[str, Any]:
    return {
        K.RACKS: [rack_to_record(r) for r in snapshot.racks],
        K.OTHER_CONSUMERS: consumers_to_rows(snapshot.consumers),
        K.CAPACITIES: capacities_to_dict(snapshot.capacities),
        K.FAILED_CHAINS: sorted(c.value for c in snapshot.failed_chains),
        K.EFFICIENCY: float(snapshot.efficiency_pct),
    }


def load_snapshot(path: Union[str, Path], *, base_capacities: Optional[Capacities] = None) -> PowerSnapshot:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot '{p}': {exc}") from exc
    except ValueError as exc:
        raise SnapshotError(f"Snapshot '{p}' is not valid JSON: {exc}") from exc
    snap = snapshot_from_dict(data, base_capacities=base_capacities)
    log.info("Snapshot loaded file=%s racks=%d", p, len(snap.racks))
    return snap


def save_snapshot(snapshot: PowerSnapshot, path: Union[str, Path]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(snapshot_to_dict(snapshot), ensure_ascii=False, indent=2), encoding="utf-8")
    log.info("Snapshot saved file=%s racks=%d", p, len(snapshot.racks))
    return p
