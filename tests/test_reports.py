# -*- coding: utf-8 -*-
import pytest

from core.calculations.reports import (
    dashboard_summary,
    high_power_racks,
    inventory,
    power_by_owner,
    rack_phase_utilization,
    rack_power_type,
)
from core.models.power import Chain, Feed, OtherConsumerLoad, Rack, Room, Utilization


def _rack(rack_id="A01", room="ITN1", f1=None, f2=None, pdu=10.0, **kw):
    return Rack(room=room, rack_id=rack_id, row=kw.pop("row", "A"), feed1=f1 or Feed(), feed2=f2 or Feed(), pdu_power=pdu, **kw)


def test_power_type():
    assert rack_power_type(_rack(supply="RIEN", f1=Feed(dc=1.0))) == "A définir"
    assert rack_power_type(_rack(f1=Feed(dc=1.0))) == "DC"
    assert rack_power_type(_rack(f1=Feed(dc=1.0), f2=Feed(p1=1.0))) == "DC + AC"
    assert rack_power_type(_rack(f1=Feed(p1=1.0, p2=1.0, p3=1.0), supply="Triphasé")) == "AC-TRI"
    assert rack_power_type(_rack(f1=Feed(p1=1.0), phase="Mono")) == "AC-MONO"
    assert rack_power_type(_rack(supply="tri")) == "AC-TRI"
    assert rack_power_type(_rack()) == "N/A"


def test_three_phase_rack_uses_worst_phase():
    rack = _rack(f1=Feed(p1=9.0, p2=1.0, p3=1.0), pdu=30.0, supply="Tri")
    assert rack_phase_utilization(rack) == Utilization.CRITICAL
    mono = _rack(f1=Feed(p1=9.0, p2=1.0, p3=1.0), pdu=30.0)
    assert rack_phase_utilization(mono) == Utilization.NORMAL


def test_high_power_racks_sorted_by_ratio():
    racks = [
        _rack("A01", f1=Feed(p1=8.5)),
        _rack("A02", f1=Feed(p1=9.5)),
        _rack("A03", f1=Feed(p1=5.0)),
        _rack("A04", f1=Feed(p1=50.0), pdu=0.0),
    ]
    rows = high_power_racks(racks)
    assert [r.rack_id for r in rows] == ["A02", "A01"]
    assert rows[0].ratio == pytest.approx(0.95)


def test_power_by_owner():
    racks = [
        _rack("A01", f1=Feed(p1=3.0), owner="Ops"),
        _rack("A02", f1=Feed(p1=2.0), owner=" "),
        _rack("A03", f1=Feed(dc=1.0), owner="Ops"),
    ]
    rows = power_by_owner(racks)
    assert [(r.owner, r.power, r.rack_count) for r in rows] == [("Ops", 4.0, 2), ("N/A", 2.0, 1)]


def test_inventory_natural_order():
    racks = [_rack("A10"), _rack("A2"), _rack("A1"), _rack("B1", room="ITN2")]
    assert [r.rack_id for r in inventory(racks)] == ["A1", "A2", "A10", "B1"]


def test_dashboard_summary():
    racks = [
        _rack("A01", f1=Feed(p1=1.0, p2=1.0, p3=1.0), f2=Feed(dc=2.0)),
        _rack("Z01", room="ITN9", f1=Feed(p1=4.0)),
    ]
    consumers = {Chain.A: OtherConsumerLoad(ac_p1=1.0, ac_p2=1.0, ac_p3=1.0, dc=5.0)}
    s = dashboard_summary(racks, consumers)
    assert s["rack_count"] == 2
    assert s["rack_power"] == pytest.approx(9.0)
    assert s["other_consumers_ac"] == pytest.approx(3.0)
    assert s["other_consumers_dc"] == pytest.approx(5.0)
    assert s["total_power"] == pytest.approx(17.0)
    assert s["by_room"]["ITN1"] == {"ac": 3.0, "dc": 2.0, "total": 5.0}
    assert "ITN9" not in s["by_room"]
    assert s["high_power_count"] == 0


def test_high_power_excludes_exactly_eighty_percent():
    racks = [_rack("A01", f1=Feed(p1=8.0)), _rack("A02", f1=Feed(p1=8.01))]
    assert [r.rack_id for r in high_power_racks(racks)] == ["A02"]
    assert dashboard_summary(racks)["high_power_count"] == 1


def test_room_member_is_listed_by_value():
    racks = [_rack("A01", room=Room.ITN1, f1=Feed(p1=9.0)), _rack("A02", room="ITN1")]
    assert [r.room for r in high_power_racks(racks)] == ["ITN1"]
    assert [r.room for r in inventory(racks)] == ["ITN1", "ITN1"]
