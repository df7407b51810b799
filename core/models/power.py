# -*- coding: utf-8 -*-
"""Models for rack power aggregation.

All records are frozen: the calculation core reads snapshots and returns new
values, it never edits a rack in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


class Room(str, Enum):
    ITN1 = "ITN1"
    ITN2 = "ITN2"
    ITN3 = "ITN3"

    @classmethod
    def parse(cls, value) -> Optional["Room"]:
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().upper()
        for room in cls:
            if room.value == s:
                return room
        return None


class Chain(str, Enum):
    A = "A"
    B = "B"
    C = "C"

    @classmethod
    def parse(cls, value) -> Optional["Chain"]:
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().upper()
        for chain in cls:
            if chain.value == s:
                return chain
        return None


def room_key(room) -> str:
    """Upper-case room text; a Room member gives its value, not "Room.ITN1"."""
    if isinstance(room, Room):
        return room.value
    return str(room or "").strip().upper()


class SourceKind(str, Enum):
    AC = "ac"
    DC = "dc"
    MIXED = "ac+dc"


class Utilization(str, Enum):
    NONE = "none"
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Feed:
    """One power connection of a rack (voie 1 or voie 2)."""

    source: str = ""
    p1: float = 0.0
    p2: float = 0.0
    p3: float = 0.0
    dc: float = 0.0

    @property
    def ac_total(self) -> float:
        return float(self.p1 + self.p2 + self.p3)

    @property
    def total(self) -> float:
        return float(self.ac_total + self.dc)

    def zeroed(self) -> "Feed":
        return replace(self, p1=0.0, p2=0.0, p3=0.0, dc=0.0)

    def plus(self, other: "Feed") -> "Feed":
        """Return this feed carrying the loads of ``other`` as well."""
        return replace(
            self,
            p1=self.p1 + other.p1,
            p2=self.p2 + other.p2,
            p3=self.p3 + other.p3,
            dc=self.dc + other.dc,
        )


@dataclass(frozen=True)
class Rack:
    # room is kept as text: records for unknown rooms still flow through
    room: str
    rack_id: str
    row: str = ""
    feed1: Feed = field(default_factory=Feed)
    feed2: Feed = field(default_factory=Feed)
    pdu_power: float = 0.0

    rack_number: str = ""
    designation: str = ""
    owner: str = ""
    supply: str = ""
    phase: str = ""
    pdu: str = ""

    @property
    def feeds(self) -> Tuple[Feed, Feed]:
        return (self.feed1, self.feed2)

    @property
    def key(self) -> Tuple[str, str]:
        return (room_key(self.room), str(self.rack_id or "").strip())

    @property
    def total_power(self) -> float:
        return float(self.feed1.total + self.feed2.total)


@dataclass(frozen=True)
class OtherConsumerLoad:
    """Non-rack consumption attached to one chain (cooling, lighting...)."""

    ac_p1: float = 0.0
    ac_p2: float = 0.0
    ac_p3: float = 0.0
    dc: float = 0.0

    @property
    def ac_total(self) -> float:
        return float(self.ac_p1 + self.ac_p2 + self.ac_p3)

    @property
    def total(self) -> float:
        return float(self.ac_total + self.dc)


ConsumerMap = Mapping[Chain, OtherConsumerLoad]


@dataclass(frozen=True)
class Capacities:
    ups_a: float = 1000.0
    ups_b: float = 1000.0
    ups_c: float = 1000.0
    room_itn1: float = 500.0
    room_itn2: float = 500.0
    room_itn3: float = 500.0
    row_ac: float = 80.0
    row_dc: float = 80.0

    def chain(self, chain: Chain) -> float:
        return float({
            Chain.A: self.ups_a,
            Chain.B: self.ups_b,
            Chain.C: self.ups_c,
        }.get(chain, 0.0))

    def room(self, room) -> float:
        r = room if isinstance(room, Room) else Room.parse(room)
        return float({
            Room.ITN1: self.room_itn1,
            Room.ITN2: self.room_itn2,
            Room.ITN3: self.room_itn3,
        }.get(r, 0.0))


@dataclass(frozen=True)
class SourceClassification:
    chain: Optional[Chain] = None
    is_ac: bool = False
    is_dc: bool = False

    @property
    def kind(self) -> Optional[SourceKind]:
        if self.is_ac and self.is_dc:
            return SourceKind.MIXED
        if self.is_ac:
            return SourceKind.AC
        if self.is_dc:
            return SourceKind.DC
        return None


@dataclass(frozen=True)
class RoomLoad:
    ac: float = 0.0
    dc: float = 0.0

    @property
    def total(self) -> float:
        return float(self.ac + self.dc)


@dataclass(frozen=True)
class RowLoad:
    ac_p1: float = 0.0
    ac_p2: float = 0.0
    ac_p3: float = 0.0
    dc_total: float = 0.0
    rack_count: int = 0

    @property
    def ac_total(self) -> float:
        return float(self.ac_p1 + self.ac_p2 + self.ac_p3)

    @property
    def max_phase(self) -> float:
        return float(max(self.ac_p1, self.ac_p2, self.ac_p3))


@dataclass(frozen=True)
class ChainRoomContribution:
    ac: float = 0.0
    dc: float = 0.0
    dc_ac_equivalent: float = 0.0


@dataclass(frozen=True)
class ChainLoad:
    chain: Chain
    phase1: float = 0.0
    phase2: float = 0.0
    phase3: float = 0.0
    by_room: Dict[str, ChainRoomContribution] = field(default_factory=dict)

    @property
    def phases(self) -> Tuple[float, float, float]:
        return (self.phase1, self.phase2, self.phase3)

    @property
    def total(self) -> float:
        return float(self.phase1 + self.phase2 + self.phase3)

    @property
    def max_phase(self) -> float:
        return float(max(self.phases))


@dataclass(frozen=True)
class SimulationResult:
    racks: Tuple[Rack, ...]
    consumers: Dict[Chain, OtherConsumerLoad]


@dataclass(frozen=True)
class PowerSnapshot:
    """Everything one computation pass needs."""

    racks: Tuple[Rack, ...] = ()
    consumers: Dict[Chain, OtherConsumerLoad] = field(default_factory=dict)
    capacities: Capacities = field(default_factory=Capacities)
    failed_chains: FrozenSet[Chain] = frozenset()
    efficiency_pct: float = 96.0
