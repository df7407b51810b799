# -*- coding: utf-8 -*-
"""
domain/normalize.py

Turns raw records (one dict per sheet row, keyed by whatever the column
headers say) into Rack / OtherConsumerLoad values.

Readers of xlsx files or of the remote sheet stay outside this package; they
only have to hand over rows as dicts. Header matching is tolerant: case,
accents-as-written, spaces and punctuation are ignored, and the aliases used
by the existing sheets are accepted.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.models.power import Chain, Feed, OtherConsumerLoad, Rack, Room, room_key
from domain.parse import to_kw, to_text

# Rack attribute -> accepted header spellings (normalized with normalize_header).
HEADER_ALIASES: Dict[str, List[str]] = {
    "room": ["salle", "room", "pièce"],
    "rack_id": ["rack", "id", "baie", "bay"],
    "row": ["rangée", "rangee", "row", "rang"],
    "rack_number": ["num_rack", "numrack", "rack_number", "n°rack", "numéro rack"],
    "designation": ["designation", "description", "label", "nom"],
    "owner": ["porteur", "owner", "client"],
    "supply": ["alimentation", "power_supply", "alim"],
    "phase": ["phase"],
    "pdu": ["pdu"],
    "pdu_power": ["puissance_pdu", "puissancepdu", "pdu_power_kw", "pdupowerkw", "puissance pdu (kw)"],
    "source1": ["canalis_redresseur_voie1", "source_voie_1", "sourcevoie1", "alimentation_voie_1"],
    "source2": ["canalis_redresseur_voie2", "source_voie_2", "sourcevoie2", "alimentation_voie_2"],
    "v1_p1": ["p_voie1_ph1", "power_v1_p1", "puissance_voie1_ph1"],
    "v1_p2": ["p_voie1_ph2", "power_v1_p2", "puissance_voie1_ph2"],
    "v1_p3": ["p_voie1_ph3", "power_v1_p3", "puissance_voie1_ph3"],
    "v1_dc": ["p_voie1_dc", "power_v1_dc", "puissance_voie1_dc"],
    "v2_p1": ["p_voie2_ph1", "power_v2_p1", "puissance_voie2_ph1"],
    "v2_p2": ["p_voie2_ph2", "power_v2_p2", "puissance_voie2_ph2"],
    "v2_p3": ["p_voie2_ph3", "power_v2_p3", "puissance_voie2_ph3"],
    "v2_dc": ["p_voie2_dc", "power_v2_dc", "puissance_voie2_dc"],
}

_CONSUMER_FIELDS = ("acp1", "acp2", "acp3", "dc")


def normalize_header(h: Any) -> str:
    return re.sub(r"[^a-z0-9]", "", str(h or "").lower())


def build_header_map(headers: Iterable[Any]) -> Dict[str, Any]:
    """Map rack attributes to the original header found in ``headers``."""
    normalized = [(h, normalize_header(h)) for h in headers or []]
    out: Dict[str, Any] = {}
    for attr, aliases in HEADER_ALIASES.items():
        for alias in aliases:
            a = normalize_header(alias)
            hit = next((orig for orig, n in normalized if n == a), None)
            if hit is not None:
                out[attr] = hit
                break
    return out


def _room_in_text(value: Any) -> Optional[Room]:
    s = str(value).lower().strip()
    # ITN1 before ITN3 before ITN2, same precedence as the legacy importer
    for room in (Room.ITN1, Room.ITN3, Room.ITN2):
        if room.value.lower() in s:
            return room
    return None


def infer_room(value: Any, record: Optional[Mapping[str, Any]] = None) -> Optional[Room]:
    """Room from the room cell, else from any text cell of the record."""
    if isinstance(value, str):
        room = _room_in_text(value)
        if room is not None:
            return room
    for cell in (record or {}).values():
        if isinstance(cell, str):
            room = _room_in_text(cell)
            if room is not None:
                return room
    return None


def rack_from_record(record: Mapping[str, Any], header_map: Optional[Mapping[str, Any]] = None) -> Optional[Rack]:
    """Build a Rack from one raw row. None when room or rack id is missing."""
    rec = dict(record or {})
    hm = dict(header_map) if header_map is not None else build_header_map(rec.keys())

    def cell(attr: str) -> Any:
        key = hm.get(attr)
        return rec.get(key) if key is not None else None

    room = infer_room(cell("room"), rec)
    rack_id = to_text(cell("rack_id"))
    if room is None or not rack_id:
        return None

    return Rack(
        room=room.value,
        rack_id=rack_id,
        row=to_text(cell("row")),
        feed1=Feed(
            source=to_text(cell("source1")),
            p1=to_kw(cell("v1_p1")),
            p2=to_kw(cell("v1_p2")),
            p3=to_kw(cell("v1_p3")),
            dc=to_kw(cell("v1_dc")),
        ),
        feed2=Feed(
            source=to_text(cell("source2")),
            p1=to_kw(cell("v2_p1")),
            p2=to_kw(cell("v2_p2")),
            p3=to_kw(cell("v2_p3")),
            dc=to_kw(cell("v2_dc")),
        ),
        pdu_power=max(to_kw(cell("pdu_power")), 0.0),
        rack_number=to_text(cell("rack_number")),
        designation=to_text(cell("designation")),
        owner=to_text(cell("owner")),
        supply=to_text(cell("supply")),
        phase=to_text(cell("phase")),
        pdu=to_text(cell("pdu")),
    )


def racks_from_records(records: Iterable[Mapping[str, Any]]) -> List[Rack]:
    """Normalize all rows.

    A repeated (room, rack) replaces the earlier reading in place: the last
    row wins, the rack keeps the position of its first appearance.
    """
    rows = [dict(r) for r in records or [] if isinstance(r, Mapping)]
    if not rows:
        return []
    hm = build_header_map(rows[0].keys())
    out: List[Rack] = []
    index: Dict[tuple, int] = {}
    for row in rows:
        rack = rack_from_record(row, hm)
        if rack is None:
            continue
        pos = index.get(rack.key)
        if pos is None:
            index[rack.key] = len(out)
            out.append(rack)
        else:
            out[pos] = rack
    return out


def rack_to_record(rack: Rack) -> Dict[str, Any]:
    """Inverse of rack_from_record, using the sheet's column names."""
    return {
        "Salle": room_key(rack.room),
        "Rack": rack.rack_id,
        "Rangée": rack.row,
        "Num_Rack": rack.rack_number,
        "Designation": rack.designation,
        "Porteur": rack.owner,
        "Alimentation": rack.supply,
        "Phase": rack.phase,
        "PDU": rack.pdu,
        "Puissance_PDU": rack.pdu_power,
        "Canalis_Redresseur_Voie1": rack.feed1.source,
        "Canalis_Redresseur_Voie2": rack.feed2.source,
        "P_Voie1_Ph1": rack.feed1.p1,
        "P_Voie1_Ph2": rack.feed1.p2,
        "P_Voie1_Ph3": rack.feed1.p3,
        "P_Voie1_DC": rack.feed1.dc,
        "P_Voie2_Ph1": rack.feed2.p1,
        "P_Voie2_Ph2": rack.feed2.p2,
        "P_Voie2_Ph3": rack.feed2.p3,
        "P_Voie2_DC": rack.feed2.dc,
    }


def consumers_from_rows(rows: Iterable[Mapping[str, Any]]) -> Optional[Dict[Chain, OtherConsumerLoad]]:
    """Other-consumer rows ({chain, acP1, acP2, acP3, dc}).

    Returns None unless all three chains are present.
    """
    out: Dict[Chain, OtherConsumerLoad] = {}
    for row in rows or []:
        if not isinstance(row, Mapping):
            continue
        cells = {normalize_header(k): v for k, v in row.items()}
        chain = Chain.parse(cells.get("chain"))
        if chain is None:
            continue
        vals = [to_kw(cells.get(f)) for f in _CONSUMER_FIELDS]
        out[chain] = OtherConsumerLoad(ac_p1=vals[0], ac_p2=vals[1], ac_p3=vals[2], dc=vals[3])
    if all(c in out for c in Chain):
        return out
    return None


def consumers_to_rows(consumers: Mapping[Chain, OtherConsumerLoad]) -> List[Dict[str, Any]]:
    rows = []
    for chain in Chain:
        c = (consumers or {}).get(chain) or OtherConsumerLoad()
        rows.append({"chain": chain.value, "acP1": c.ac_p1, "acP2": c.ac_p2, "acP3": c.ac_p3, "dc": c.dc})
    return rows
