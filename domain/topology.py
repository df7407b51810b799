# -*- coding: utf-8 -*-
"""
domain/topology.py

Fixed IT distribution layout: which AC boards (TDHQ -> TB panels) and which
rectifiers (SWB.REC) of each chain feed each room.

Chain membership of a feed is decided from its source label prefix. The
tables below are the single lookup structure: room -> chain -> kind -> prefixes.
They are constant data, not user settings.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Tuple

from core.models.power import Chain, Room, SourceKind

# Rows of the floor layout, same letters in every room.
ROW_IDS: Tuple[str, ...] = tuple("ABCDEFGHIJ")

# Chains serving each room.
ROOM_CHAINS: Dict[Room, Tuple[Chain, ...]] = {
    Room.ITN1: (Chain.A, Chain.B),
    Room.ITN2: (Chain.A, Chain.C),
    Room.ITN3: (Chain.B, Chain.C),
}


def _tb(room_no: int, chain: str) -> List[str]:
    return [f"IT.{room_no}-TB.{chain}.{i}" for i in range(1, 6)]


def _rec(room_no: int, chain: str) -> List[str]:
    return [f"IT.{room_no}-SWB.REC {chain}.{i}" for i in range(1, 5)]


# AC distribution boards (TDHQ) and the panel prefixes they feed.
PANEL_BOARDS: Dict[Chain, Dict[str, Tuple[Room, List[str]]]] = {
    Chain.A: {
        "TC.1.1-TDHQ.IT.A": (Room.ITN1, _tb(1, "A")),
        "TC.2.1-TDHQ.IT.A": (Room.ITN2, _tb(2, "A")),
    },
    Chain.B: {
        "TC.1.1-TDHQ.IT.B": (Room.ITN1, _tb(1, "B")),
        "TC.3.1-TDHQ.IT.B": (Room.ITN3, _tb(3, "B")),
    },
    Chain.C: {
        "TC.2.2-TDHQ.IT.C": (Room.ITN2, _tb(2, "C")),
        "TC.3.2-TDHQ.IT.C": (Room.ITN3, _tb(3, "C")),
    },
}

RECTIFIERS: Dict[Chain, Dict[Room, List[str]]] = {
    Chain.A: {Room.ITN1: _rec(1, "A"), Room.ITN2: _rec(2, "A")},
    Chain.B: {Room.ITN1: _rec(1, "B"), Room.ITN3: _rec(3, "B")},
    Chain.C: {Room.ITN2: _rec(2, "C"), Room.ITN3: _rec(3, "C")},
}


SourceMap = Mapping[Room, Mapping[Chain, Mapping[SourceKind, Tuple[str, ...]]]]


def build_source_map() -> Dict[Room, Dict[Chain, Dict[SourceKind, Tuple[str, ...]]]]:
    """Flatten boards and rectifiers into room -> chain -> kind -> prefixes.

    Prefixes are stored trimmed and case-folded, ready for ``startswith``.
    A chain that does not serve a room has no entry for it.
    """
    out: Dict[Room, Dict[Chain, Dict[SourceKind, Tuple[str, ...]]]] = {r: {} for r in Room}
    for chain, boards in PANEL_BOARDS.items():
        for room, prefixes in boards.values():
            kinds = out[room].setdefault(chain, {SourceKind.AC: (), SourceKind.DC: ()})
            kinds[SourceKind.AC] = kinds[SourceKind.AC] + tuple(p.strip().casefold() for p in prefixes)
    for chain, rooms in RECTIFIERS.items():
        for room, prefixes in rooms.items():
            kinds = out[room].setdefault(chain, {SourceKind.AC: (), SourceKind.DC: ()})
            kinds[SourceKind.DC] = kinds[SourceKind.DC] + tuple(p.strip().casefold() for p in prefixes)
    return out


CHAIN_SOURCE_MAP = build_source_map()


def board_for_source(label: str) -> str:
    """Name of the TDHQ board feeding an AC panel label ("" if none)."""
    s = str(label or "").strip().casefold()
    if not s:
        return ""
    for boards in PANEL_BOARDS.values():
        for name, (_room, prefixes) in boards.items():
            if any(s.startswith(p.casefold()) for p in prefixes):
                return name
    return ""


def rooms_for_prefix_match(label: str) -> List[Room]:
    """Rooms whose tables (any chain, any kind) contain a prefix of ``label``."""
    s = str(label or "").strip().casefold()
    found: List[Room] = []
    if not s:
        return found
    for room, chains in CHAIN_SOURCE_MAP.items():
        for kinds in chains.values():
            if any(s.startswith(p) for prefixes in kinds.values() for p in prefixes):
                found.append(room)
                break
    return found
