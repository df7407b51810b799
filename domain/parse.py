# -*- coding: utf-8 -*-
"""
domain/parse.py

Tolerant parsing of cell values coming from sheets and forms.
- Decimal comma or dot: "12,5", "12.5"
- Thousands separators: "1.234,56" or "1,234.56"
- Blank cells and dash placeholders ("-", "—") count as missing.
"""

from __future__ import annotations

import math
from typing import Any, Optional


_DASH_CHARS = "—–-"


def is_blank(val: Any, allow_dash: bool = True) -> bool:
    if val is None:
        return True
    # bool is an int subclass; never blank
    if isinstance(val, (int, float)):
        return False

    s = str(val).strip()
    if s == "":
        return True
    if allow_dash and all(ch in _DASH_CHARS or ch == " " for ch in s):
        return True
    return False


def _normalize_separators(s: str) -> str:
    s = s.replace(" ", "").replace("\u00a0", "")
    if "," in s and "." in s:
        # the last separator is the decimal one
        if s.rfind(",") > s.rfind("."):
            return s.replace(".", "").replace(",", ".")
        return s.replace(",", "")
    return s.replace(",", ".")


def to_float(val: Any, default: Optional[float] = None, allow_dash: bool = True) -> Optional[float]:
    """Parse ``val`` as a float; ``default`` when blank or unparseable."""
    if is_blank(val, allow_dash=allow_dash):
        return default
    if isinstance(val, bool):
        return default

    if isinstance(val, (int, float)):
        f = float(val)
    else:
        try:
            f = float(_normalize_separators(str(val).strip()))
        except ValueError:
            return default

    if not math.isfinite(f):
        return default
    return f


def to_kw(val: Any) -> float:
    """Power reading in kW; anything missing or invalid reads as 0."""
    return float(to_float(val, default=0.0) or 0.0)


def to_text(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    return str(val).strip()
