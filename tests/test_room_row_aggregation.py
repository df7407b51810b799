# -*- coding: utf-8 -*-
import pytest

from core.calculations.room_row import aggregate_room, aggregate_rooms, aggregate_row, aggregate_rows
from core.models.power import Chain, Feed, Rack, Room, SourceKind
from domain.topology import ROW_IDS


def _rack(room, rack_id, row="A", f1=None, f2=None, pdu=10.0):
    return Rack(room=room, rack_id=rack_id, row=row, feed1=f1 or Feed(), feed2=f2 or Feed(), pdu_power=pdu)


def _pair(rack_id, row="A"):
    return _rack(
        "ITN1", rack_id, row,
        f1=Feed("IT.1-TB.A.1", 2.0, 2.0, 2.0),
        f2=Feed("IT.1-TB.B.1", 1.0, 1.0, 1.0),
    )


def test_room_ac_sums_both_feeds():
    racks = [_pair("A01"), _pair("A02")]
    load = aggregate_room(racks, Room.ITN1)
    assert load.ac == pytest.approx(18.0)
    assert load.dc == 0.0
    assert load.total == pytest.approx(18.0)


def test_room_dc_from_rectifier_feeds():
    racks = [_rack("ITN1", "B01", f1=Feed("IT.1-SWB.REC A.1", dc=4.0), f2=Feed("IT.1-SWB.REC B.2", dc=3.5))]
    load = aggregate_room(racks, "itn1")
    assert load.ac == 0.0
    assert load.dc == pytest.approx(7.5)


def test_rack_counts_only_in_its_room():
    racks = [_pair("A01"), _rack("ITN2", "Z01", f1=Feed("IT.2-TB.A.1", 5.0, 5.0, 5.0))]
    loads = aggregate_rooms(racks)
    assert loads[Room.ITN1].ac == pytest.approx(9.0)
    assert loads[Room.ITN2].ac == pytest.approx(15.0)
    assert loads[Room.ITN3].total == 0.0


def test_label_of_another_room_is_not_counted():
    racks = [_rack("ITN1", "A01", f1=Feed("IT.2-TB.A.1", 5.0, 5.0, 5.0))]
    assert aggregate_room(racks, Room.ITN1).total == 0.0
    assert aggregate_room(racks, Room.ITN2).total == 0.0


def test_unknown_room_is_ignored():
    racks = [_rack("ITN9", "A01", f1=Feed("IT.1-TB.A.1", 1.0, 1.0, 1.0))]
    assert aggregate_room(racks, "ITN9").total == 0.0
    assert aggregate_room(racks, Room.ITN1).total == 0.0


def test_room_total_is_order_independent():
    racks = [_pair("A01"), _pair("A02", row="B"), _rack("ITN1", "C1", f1=Feed("IT.1-SWB.REC A.3", dc=2.0))]
    assert aggregate_room(racks, Room.ITN1) == aggregate_room(list(reversed(racks)), Room.ITN1)


def test_row_per_phase_totals():
    racks = [_pair("A01"), _pair("A02"), _pair("B01", row="B")]
    row = aggregate_row(racks, Room.ITN1, "A")
    assert row.ac_p1 == pytest.approx(6.0)
    assert row.ac_p2 == pytest.approx(6.0)
    assert row.ac_p3 == pytest.approx(6.0)
    assert row.ac_total == pytest.approx(18.0)
    assert row.rack_count == 2


def test_row_match_ignores_case():
    racks = [_pair("A01", row=" a ")]
    assert aggregate_row(racks, Room.ITN1, "A").rack_count == 1


def test_blank_row_counts_in_room_but_not_in_rows():
    racks = [_pair("A01", row=""), _pair("A02", row="A")]
    assert aggregate_room(racks, Room.ITN1).ac == pytest.approx(18.0)
    rows = aggregate_rows(racks, Room.ITN1)
    assert sum(r.rack_count for r in rows.values()) == 1
    assert aggregate_row(racks, Room.ITN1, "").rack_count == 0


def test_rows_cover_the_layout():
    rows = aggregate_rows([], Room.ITN2)
    assert tuple(rows) == ROW_IDS
    assert all(r.ac_total == 0.0 and r.dc_total == 0.0 for r in rows.values())


def test_row_dc_total():
    racks = [_rack("ITN3", "J9", row="J", f1=Feed("IT.3-SWB.REC B.1", dc=1.5), f2=Feed("IT.3-SWB.REC C.4", dc=1.5))]
    row = aggregate_rows(racks, Room.ITN3)["J"]
    assert row.dc_total == pytest.approx(3.0)
    assert row.max_phase == 0.0


def test_room_member_and_text_give_same_totals():
    racks = [Rack(room=Room.ITN1, rack_id="A01", row="A", feed1=Feed("IT.1-TB.A.1", 2.0, 2.0, 2.0))]
    assert aggregate_room(racks, Room.ITN1).ac == pytest.approx(6.0)
    assert aggregate_room(racks, "ITN1").ac == pytest.approx(6.0)
    assert aggregate_row(racks, Room.ITN1, "A").rack_count == 1


def test_mixed_source_adds_to_ac_and_dc():
    source_map = {Room.ITN1: {Chain.A: {SourceKind.AC: ("it.1-x",), SourceKind.DC: ("it.1-x",)}}}
    racks = [_rack("ITN1", "A01", f1=Feed("IT.1-X.A.1", 1.0, 2.0, 3.0, dc=4.0))]

    load = aggregate_room(racks, Room.ITN1, source_map=source_map)
    assert load.ac == pytest.approx(6.0)
    assert load.dc == pytest.approx(4.0)

    row = aggregate_row(racks, Room.ITN1, "A", source_map=source_map)
    assert (row.ac_p1, row.ac_p2, row.ac_p3, row.dc_total) == pytest.approx((1.0, 2.0, 3.0, 4.0))
    assert aggregate_rows(racks, Room.ITN1, ("A",), source_map=source_map)["A"] == row
    assert aggregate_rooms(racks, source_map=source_map)[Room.ITN1] == load

    assert aggregate_room(racks, Room.ITN1).total == 0.0
