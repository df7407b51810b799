# -*- coding: utf-8 -*-
"""ValidationService

Runs the pure validators over a PowerSnapshot.

- No PyQt dependency.
- Validators return core.types.Issue dataclass instances.
- A crashing validator never stops the computation; it becomes an Issue.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from core.models.power import PowerSnapshot
from core.sections import Section
from core.types import Issue, Severity
from core.validators.capacities import validate_capacities, validate_efficiency
from core.validators.racks import validate_racks

log = logging.getLogger(__name__)


_VALIDATOR_MAP: Dict[Section, Callable[[PowerSnapshot], List[Issue]]] = {
    Section.RACKS: lambda snap: validate_racks(snap.racks),
    Section.CAPACITIES: lambda snap: validate_capacities(snap.capacities),
    Section.EFFICIENCY: lambda snap: validate_efficiency(snap.efficiency_pct),
    Section.CONSUMERS: lambda snap: [],
    Section.FAILURES: lambda snap: [],
}


def _dedupe(issues: Iterable[Issue]) -> List[Issue]:
    seen = set()
    uniq: List[Issue] = []
    for it in issues:
        key = (it.code, it.message, it.context)
        if key in seen:
            continue
        seen.add(key)
        uniq.append(it)
    return uniq


class ValidationService:
    def validate_sections(self, snapshot: PowerSnapshot, sections: Iterable[Section]) -> Dict[str, List[Issue]]:
        """Validate the given sections, keyed by Section.value."""
        out: Dict[str, List[Issue]] = {}
        for sec in sections or []:
            sec = sec if isinstance(sec, Section) else Section(str(sec))
            fn = _VALIDATOR_MAP.get(sec)
            if not fn:
                continue
            try:
                issues = fn(snapshot) or []
            except Exception:
                log.warning("validator %s failed", sec.value, exc_info=True)
                issues = [Issue(code="VALIDATOR_CRASH", message=f"Validator '{sec.value}' failed (see logs).", severity=Severity.WARNING, context=sec.value)]
            out[sec.value] = _dedupe(issues)
        return out

    def validate(self, snapshot: PowerSnapshot, sections: Optional[Iterable[Section]] = None) -> List[Issue]:
        secs = list(sections) if sections is not None else list(_VALIDATOR_MAP)
        flat: List[Issue] = []
        for lst in self.validate_sections(snapshot, secs).values():
            flat.extend(lst)
        return _dedupe(flat)


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(it.is_error for it in issues or [])
