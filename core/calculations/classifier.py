# -*- coding: utf-8 -*-
"""Feed source classification (pure).

Label grammar for the chain letter, first match wins:
  1. a single A/B/C with a separator (".", "-", whitespace) before it and a
     separator or the end of the label after it: "IT.1-TB.A.3", "X-B-2"
  2. the token REC, whitespace, then the letter: "SWB.REC C.1"

Kind is resolved against the room's prefix tables. AC and DC checks are
independent; a label may match both.

NOTE: This module must not depend on PyQt, logging or settings.
"""

from __future__ import annotations

import re
from typing import Optional

from core.models.power import Chain, Room, SourceClassification, SourceKind
from domain.topology import CHAIN_SOURCE_MAP, SourceMap

_SEPARATED_LETTER = re.compile(r"[.\-\s]([ABC])(?:[.\-\s]|$)")
_REC_LETTER = re.compile(r"REC\s([ABC])")

_UNCLASSIFIED = SourceClassification()


def _normalize_label(label) -> str:
    if label is None:
        return ""
    return str(label).strip()


def extract_chain(label) -> Optional[Chain]:
    s = _normalize_label(label).upper()
    if not s:
        return None
    m = _SEPARATED_LETTER.search(s) or _REC_LETTER.search(s)
    if not m:
        return None
    return Chain(m.group(1))


def classify(label, room, source_map: SourceMap = CHAIN_SOURCE_MAP) -> SourceClassification:
    """Classify a feed label for a rack standing in ``room``.

    Returns the chain letter (or None) and whether the label starts with an
    AC panel prefix and/or a DC rectifier prefix of that chain in that room.
    """
    chain = extract_chain(label)
    if chain is None:
        return _UNCLASSIFIED

    r = room if isinstance(room, Room) else Room.parse(room)
    kinds = (source_map.get(r) or {}).get(chain) if r is not None else None
    if not kinds:
        return SourceClassification(chain=chain)

    s = _normalize_label(label).casefold()
    is_ac = any(s.startswith(p) for p in kinds.get(SourceKind.AC, ()))
    is_dc = any(s.startswith(p) for p in kinds.get(SourceKind.DC, ()))
    return SourceClassification(chain=chain, is_ac=is_ac, is_dc=is_dc)
