# -*- coding: utf-8 -*-
"""Chain failure simulation (pure).

Rebuilds the rack and other-consumer state as it would be with the given
chains down; the result is fed to the chain aggregator again. Works for any
number of failed chains, the one-at-a-time rule lives with the caller
(services.failure_toggle).
"""

from __future__ import annotations

from dataclasses import replace
from typing import AbstractSet, Dict, Iterable, Mapping, Optional

from core.calculations.classifier import extract_chain
from core.models.power import Chain, Feed, OtherConsumerLoad, Rack, SimulationResult


def _feed_active(feed: Feed, failed: AbstractSet[Chain]) -> bool:
    # A label without a chain letter is not attached to any chain: never failed.
    chain = extract_chain(feed.source)
    return chain is None or chain not in failed


def simulate_rack(rack: Rack, failed_chains: AbstractSet[Chain]) -> Rack:
    failed = frozenset(failed_chains or ())
    if not failed:
        return rack

    v1 = _feed_active(rack.feed1, failed)
    v2 = _feed_active(rack.feed2, failed)

    if v1 and v2:
        return rack
    if v1 and not v2:
        return replace(rack, feed1=rack.feed1.plus(rack.feed2), feed2=rack.feed2.zeroed())
    if v2 and not v1:
        return replace(rack, feed1=rack.feed1.zeroed(), feed2=rack.feed2.plus(rack.feed1))
    # both feeds on failed chains: nothing left to carry the load
    return replace(rack, feed1=rack.feed1.zeroed(), feed2=rack.feed2.zeroed())


def simulate_consumers(
    consumers: Optional[Mapping[Chain, OtherConsumerLoad]],
    failed_chains: AbstractSet[Chain],
) -> Dict[Chain, OtherConsumerLoad]:
    """Split each failed chain's consumers evenly over the surviving chains."""
    base = {c: (consumers or {}).get(c) or OtherConsumerLoad() for c in Chain}
    failed = [c for c in Chain if c in (failed_chains or ())]
    if not failed:
        return dict(consumers or {})

    active = [c for c in Chain if c not in failed]
    out = dict(base)
    if active:
        n = float(len(active))
        for fc in failed:
            moved = base[fc]
            for ac in active:
                cur = out[ac]
                out[ac] = OtherConsumerLoad(
                    ac_p1=cur.ac_p1 + moved.ac_p1 / n,
                    ac_p2=cur.ac_p2 + moved.ac_p2 / n,
                    ac_p3=cur.ac_p3 + moved.ac_p3 / n,
                    dc=cur.dc + moved.dc / n,
                )
    for fc in failed:
        out[fc] = OtherConsumerLoad()
    return out


def simulate(
    racks: Iterable[Rack],
    consumers: Optional[Mapping[Chain, OtherConsumerLoad]],
    failed_chains: AbstractSet[Chain],
) -> SimulationResult:
    rack_list = tuple(racks or ())
    failed = frozenset(failed_chains or ())
    if not failed:
        return SimulationResult(racks=rack_list, consumers=dict(consumers or {}))
    return SimulationResult(
        racks=tuple(simulate_rack(r, failed) for r in rack_list),
        consumers=simulate_consumers(consumers, failed),
    )
