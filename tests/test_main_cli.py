# -*- coding: utf-8 -*-
"""CLI smoke tests (report / validate)."""

import json

import pytest

from main import main

pytestmark = pytest.mark.usefixtures("restore_root_logging")


def _write(tmp_path, data):
    p = tmp_path / "snap.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return str(p)


RACKS = [
    {"Salle": "ITN1", "Rack": "A01", "Rangée": "A", "Puissance_PDU": 10,
     "Canalis_Redresseur_Voie1": "IT.1-TB.A.1", "P_Voie1_Ph1": 2,
     "Canalis_Redresseur_Voie2": "IT.1-TB.B.1", "P_Voie2_Ph1": 1},
]


def test_report(tmp_path, capsys):
    path = _write(tmp_path, {"racks": RACKS, "otherConsumers": []})
    assert main(["report", path, "--fail", "a", "--efficiency", "90"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["failed_chains"] == ["A"]
    assert out["efficiency_pct"] == 90.0
    assert out["rooms"]["ITN1"]["ac"] == 3.0
    assert out["chains"]["A"]["phases"][0] == 0.0


def test_report_unknown_chain(tmp_path, capsys):
    path = _write(tmp_path, {"racks": RACKS})
    assert main(["report", path, "--fail", "Z"]) == 1
    assert "Unknown chain" in capsys.readouterr().err


def test_validate_exit_code(tmp_path, capsys):
    path = _write(tmp_path, {"racks": RACKS})
    assert main(["validate", path]) == 0
    assert json.loads(capsys.readouterr().out) == []

    zero_cap = _write(tmp_path, {"racks": RACKS, "capacities": {"UPS_A_kW": 0}})
    assert main(["validate", zero_cap]) == 0
    issues = json.loads(capsys.readouterr().out)
    assert [it["code"] for it in issues] == ["CAP_NOT_POSITIVE"]


def test_missing_snapshot(tmp_path, capsys):
    assert main(["validate", str(tmp_path / "nope.json")]) == 1
    assert "Cannot read snapshot" in capsys.readouterr().err
