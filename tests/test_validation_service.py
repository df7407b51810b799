# -*- coding: utf-8 -*-
from core.models.power import Capacities, Chain, Feed, PowerSnapshot, Rack, Room, SourceKind
from core.sections import Section
from core.types import Severity, count_by_severity
from core.validators.racks import validate_racks
from services import validation_service
from services.validation_service import ValidationService, has_errors


def _rack(rack_id="A01", room="ITN1", row="A", s1="IT.1-TB.A.1", s2="IT.1-TB.B.1", pdu=10.0):
    return Rack(room=room, rack_id=rack_id, row=row, feed1=Feed(s1, 1.0, 1.0, 1.0), feed2=Feed(s2, 1.0, 1.0, 1.0), pdu_power=pdu)


def _codes(issues):
    return [it.code for it in issues]


def test_clean_snapshot_has_no_issues():
    snap = PowerSnapshot(racks=(_rack(), _rack("A02", s2="IT.1-SWB.REC B.1")))
    assert ValidationService().validate(snap) == []


def test_duplicate_rack_is_an_error():
    snap = PowerSnapshot(racks=(_rack(), _rack(room="itn1")))
    issues = ValidationService().validate(snap)
    assert "RACK_DUPLICATE" in _codes(issues)
    assert has_errors(issues) is True


def test_rack_record_issues():
    snap = PowerSnapshot(racks=(
        _rack("A01", room="Lab"),
        _rack("A02", row="", pdu=0.0),
        Rack(room="ITN1", rack_id="A03", row="A", feed1=Feed("IT.1-TB.A.1", p1=-1.0), feed2=Feed("IT.1-TB.B.1"), pdu_power=5.0),
    ))
    codes = _codes(ValidationService().validate(snap, [Section.RACKS]))
    assert codes.count("RACK_ROOM_UNKNOWN") == 1
    assert "RACK_ROW_MISSING" in codes
    assert "RACK_PDU_MISSING" in codes
    assert "RACK_NEGATIVE_LOAD" in codes


def test_feed_label_issues():
    snap = PowerSnapshot(racks=(
        _rack("A01", s1="CABLE 7"),
        _rack("A02", s1="IT.1-TB.C.1"),
        _rack("A03", s1="IT.2-TB.A.1"),
        Rack(room="ITN1", rack_id="A04", row="A", feed1=Feed("", p1=2.0), feed2=Feed("IT.1-TB.B.1"), pdu_power=5.0),
    ))
    issues = ValidationService().validate(snap)
    by_ctx = {(it.context, it.code) for it in issues}
    assert ("ITN1/A01", "FEED_SOURCE_UNRECOGNIZED") in by_ctx
    assert ("ITN1/A02", "FEED_CHAIN_NOT_IN_ROOM") in by_ctx
    assert ("ITN1/A03", "FEED_SOURCE_UNMATCHED") in by_ctx
    assert ("ITN1/A04", "FEED_SOURCE_MISSING") in by_ctx
    assert has_errors(issues) is False


def test_capacity_and_efficiency_issues():
    snap = PowerSnapshot(capacities=Capacities(row_dc=0.0), efficiency_pct=0.0)
    issues = ValidationService().validate(snap)
    caps = [it for it in issues if it.code == "CAP_NOT_POSITIVE"]
    assert [it.context for it in caps] == ["ROW_DC_CAPACITY_kW"]
    assert "EFFICIENCY_INVALID" in _codes(issues)

    over = ValidationService().validate(PowerSnapshot(efficiency_pct=120.0), [Section.EFFICIENCY])
    assert _codes(over) == ["EFFICIENCY_ABOVE_100"]


def test_validate_sections_keys():
    out = ValidationService().validate_sections(PowerSnapshot(), [Section.RACKS, "capacities", Section.SNAPSHOT_LOADED])
    assert set(out) == {"racks", "capacities"}


def test_crashing_validator_becomes_an_issue(monkeypatch):
    def boom(_snap):
        raise RuntimeError("boom")

    monkeypatch.setitem(validation_service._VALIDATOR_MAP, Section.RACKS, boom)
    issues = ValidationService().validate(PowerSnapshot(), [Section.RACKS])
    assert _codes(issues) == ["VALIDATOR_CRASH"]
    assert issues[0].severity == Severity.WARNING


def test_count_by_severity():
    snap = PowerSnapshot(racks=(_rack(), _rack(), _rack("A02", row="")), efficiency_pct=-1.0)
    counts = count_by_severity(ValidationService().validate(snap))
    assert counts == {"info": 1, "warning": 1, "error": 1}


def test_room_member_duplicates_room_text():
    issues = validate_racks([_rack(room=Room.ITN1), _rack(room="ITN1")])
    dup = [it for it in issues if it.code == "RACK_DUPLICATE"]
    assert len(dup) == 1
    assert dup[0].context == "ITN1/A01"


def test_mixed_source_is_reported_with_custom_tables():
    source_map = {
        Room.ITN1: {
            Chain.A: {SourceKind.AC: ("it.1-x",), SourceKind.DC: ("it.1-x",)},
            Chain.B: {SourceKind.AC: ("it.1-tb.b",), SourceKind.DC: ()},
        },
    }
    racks = [_rack(s1="IT.1-X.A.1")]
    issues = validate_racks(racks, source_map=source_map)
    mixed = [it for it in issues if it.code == "FEED_SOURCE_MIXED"]
    assert [it.context for it in mixed] == ["ITN1/A01"]
    assert mixed[0].severity == Severity.INFO
    assert "FEED_SOURCE_MIXED" not in _codes(validate_racks(racks))
