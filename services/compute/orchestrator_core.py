# -*- coding: utf-8 -*-
"""Pure recompute scheduling core (no UI dependencies).

Edits arrive as bursts (typing a capacity, importing racks). Sections are
marked dirty as they change; a recompute runs once the burst has been quiet
for ``debounce_ms`` and covers every section touched meanwhile.
"""
from __future__ import annotations

import time
from typing import Dict, Optional, Set

from core.sections import Section


class ComputeOrchestratorCore:
    """Debounced dirty tracker for snapshot sections."""

    def __init__(self, *, debounce_ms: int = 150) -> None:
        self._debounce_ms = int(debounce_ms)
        self._dirty: Dict[Section, str] = {}
        self._last_mark_ts: float = 0.0
        self._compute_id = 0

    def mark_dirty(self, section: Section, *, reason: str = "edit", now: Optional[float] = None) -> None:
        self._dirty[section] = str(reason or "edit")
        self._last_mark_ts = float(time.monotonic() if now is None else now)

    def should_run(self, *, now: Optional[float] = None) -> bool:
        if not self._dirty:
            return False
        ts = float(time.monotonic() if now is None else now)
        return (ts - self._last_mark_ts) * 1000.0 >= float(self._debounce_ms)

    def pop_dirty(self) -> Set[Section]:
        dirty = set(self._dirty)
        self._dirty.clear()
        return dirty

    def has_dirty(self) -> bool:
        return bool(self._dirty)

    def reasons(self) -> Dict[Section, str]:
        return dict(self._dirty)

    def next_compute_id(self) -> int:
        self._compute_id += 1
        return self._compute_id

    @property
    def current_compute_id(self) -> int:
        return self._compute_id


def is_stale_result(current_id: int, result_id: int) -> bool:
    """Return True if a compute result should be discarded."""
    try:
        return int(result_id) != int(current_id)
    except (TypeError, ValueError):
        return True
