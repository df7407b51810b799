# -*- coding: utf-8 -*-
"""
User settings stored in a per-user writable folder (no admin).

Holds the values the operator saves "as default" between sessions:
capacity limits, rectifier efficiency and other-consumer loads. Each
computation receives a snapshot built from them; nothing here is read by the
calculation core directly.
"""
from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Optional

from core.keys import CAPACITY_FIELDS, SettingsKeys as K
from core.models.power import Capacities, Chain, OtherConsumerLoad
from domain.normalize import consumers_from_rows, consumers_to_rows
from domain.parse import to_float
from infra.paths import settings_file

log = logging.getLogger(__name__)

DEFAULT_EFFICIENCY_PCT = 96.0

DEFAULT_CONSUMERS: Dict[Chain, OtherConsumerLoad] = {
    Chain.A: OtherConsumerLoad(ac_p1=8.28, ac_p2=8.28, ac_p3=8.28, dc=5.0),
    Chain.B: OtherConsumerLoad(ac_p1=6.29, ac_p2=6.29, ac_p3=6.29, dc=5.0),
    Chain.C: OtherConsumerLoad(ac_p1=7.31, ac_p2=7.31, ac_p3=7.31, dc=5.0),
}


def capacities_to_dict(c: Capacities) -> Dict[str, float]:
    return {key: float(getattr(c, attr)) for key, attr in CAPACITY_FIELDS.items()}


def capacities_from_dict(data: Optional[Dict[str, Any]], base: Optional[Capacities] = None) -> Capacities:
    """Merge stored values over ``base`` (defaults); unparseable values are ignored."""
    base = base or Capacities()
    values = {f.name: getattr(base, f.name) for f in fields(Capacities)}
    for key, attr in CAPACITY_FIELDS.items():
        raw = (data or {}).get(key)
        v = to_float(raw, default=None)
        if v is not None:
            values[attr] = v
    return Capacities(**values)


def _defaults() -> Dict[str, Any]:
    return {
        K.CAPACITIES: capacities_to_dict(Capacities()),
        K.EFFICIENCY_PCT: DEFAULT_EFFICIENCY_PCT,
        K.OTHER_CONSUMERS: consumers_to_rows(DEFAULT_CONSUMERS),
    }


def _path(path: Optional[Path]) -> Path:
    return Path(path) if path is not None else settings_file()


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    p = _path(path)
    defaults = _defaults()
    if not p.exists():
        save_settings(defaults, p)
        return defaults

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        # Recover from corruption gracefully
        log.warning("Settings file %s unreadable, restoring defaults.", p, exc_info=True)
        save_settings(defaults, p)
        return defaults

    merged = dict(defaults)
    if isinstance(data, dict):
        merged.update({k: v for k, v in data.items() if v is not None})
    return merged


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    p = _path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def load_capacities(path: Optional[Path] = None) -> Capacities:
    s = load_settings(path)
    stored = s.get(K.CAPACITIES)
    return capacities_from_dict(stored if isinstance(stored, dict) else {})


def save_capacities(capacities: Capacities, path: Optional[Path] = None) -> None:
    s = load_settings(path)
    s[K.CAPACITIES] = capacities_to_dict(capacities)
    save_settings(s, path)
    log.info("Capacities saved as default.")


def load_efficiency(path: Optional[Path] = None) -> float:
    v = to_float(load_settings(path).get(K.EFFICIENCY_PCT), default=None)
    if v is None or v <= 0:
        return DEFAULT_EFFICIENCY_PCT
    return v


def save_efficiency(efficiency_pct: float, path: Optional[Path] = None) -> None:
    s = load_settings(path)
    s[K.EFFICIENCY_PCT] = float(efficiency_pct)
    save_settings(s, path)


def load_consumers(path: Optional[Path] = None) -> Dict[Chain, OtherConsumerLoad]:
    rows = load_settings(path).get(K.OTHER_CONSUMERS)
    parsed = consumers_from_rows(rows if isinstance(rows, list) else [])
    return parsed if parsed is not None else dict(DEFAULT_CONSUMERS)


def save_consumers(consumers: Dict[Chain, OtherConsumerLoad], path: Optional[Path] = None) -> None:
    s = load_settings(path)
    s[K.OTHER_CONSUMERS] = consumers_to_rows(consumers)
    save_settings(s, path)
