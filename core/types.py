# -*- coding: utf-8 -*-
"""Shared domain types (pure, test-friendly)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Issue:
    """One finding about the input. ``context`` is "ROOM/RACK" or a settings key."""

    code: str
    message: str
    severity: Severity = Severity.WARNING
    context: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
        }


def count_by_severity(issues: Iterable[Issue]) -> Dict[str, int]:
    counts = {s.value: 0 for s in Severity}
    for it in issues or []:
        counts[it.severity.value] += 1
    return counts
