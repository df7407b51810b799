# -*- coding: utf-8 -*-
"""Rack power command line entrypoint.

Intentionally minimal:
- bootstrap (logging, settings)
- load a snapshot file
- run the compute service or the validators
- print JSON to stdout
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

log = logging.getLogger("rackpower")


def _build_parser() -> argparse.ArgumentParser:
    from rackpower.version import get_version

    parser = argparse.ArgumentParser(prog="rackpower", description="Rack, room and power chain load figures.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    rep = sub.add_parser("report", help="compute room/row/chain loads for a snapshot")
    rep.add_argument("snapshot", help="snapshot JSON file")
    rep.add_argument("--fail", action="append", default=[], metavar="CHAIN", help="simulate chain A, B or C stopped")
    rep.add_argument("--efficiency", type=float, default=None, help="rectifier efficiency in %% (default from snapshot)")
    rep.add_argument("--use-settings", action="store_true", help="fill missing capacities from the user settings")

    val = sub.add_parser("validate", help="list issues found in a snapshot")
    val.add_argument("snapshot", help="snapshot JSON file")
    return parser


def _load(path: str, use_settings: bool):
    from infra.settings import load_capacities
    from storage.snapshot_io import load_snapshot

    base = load_capacities() if use_settings else None
    return load_snapshot(path, base_capacities=base)


def _cmd_report(args) -> int:
    from core.models.power import Chain
    from services.compute.power_compute_service import PowerComputeService

    snap = _load(args.snapshot, args.use_settings)
    failed = set(snap.failed_chains)
    for raw in args.fail or []:
        chain = Chain.parse(raw)
        if chain is None:
            print(f"Unknown chain '{raw}' (expected A, B or C).", file=sys.stderr)
            return 1
        failed.add(chain)
    snap = replace(snap, failed_chains=frozenset(failed))
    if args.efficiency is not None:
        snap = replace(snap, efficiency_pct=float(args.efficiency))

    result = PowerComputeService().compute(snap)
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


def _cmd_validate(args) -> int:
    from core.types import count_by_severity
    from services.validation_service import ValidationService, has_errors

    snap = _load(args.snapshot, False)
    issues = ValidationService().validate(snap)
    log.info("Validation of %s: %s", args.snapshot, count_by_severity(issues))
    print(json.dumps([it.to_dict() for it in issues], ensure_ascii=False, indent=2))
    return 1 if has_errors(issues) else 0


def main(argv: Optional[List[str]] = None) -> int:
    from app.bootstrap import bootstrap
    from storage.snapshot_io import SnapshotError

    args = _build_parser().parse_args(argv)
    bootstrap(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.command == "report":
            return _cmd_report(args)
        if args.command == "validate":
            return _cmd_validate(args)
    except SnapshotError as exc:
        log.error("%s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())
