# -*- coding: utf-8 -*-
"""Chain stop/restart rule used by the power chain controls.

Only one chain may be stopped at a time:
- stopping a chain while none is stopped -> that chain is failed
- stopping a second chain                -> rejected, state unchanged
- restarting the stopped chain           -> all chains active again

The simulator itself accepts any failed set; this rule is the caller's.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, FrozenSet, Tuple

from core.models.power import Chain

log = logging.getLogger(__name__)


def toggle_failed_chain(current: AbstractSet[Chain], chain: Chain) -> Tuple[FrozenSet[Chain], bool]:
    """Return (new failed set, accepted)."""
    failed = frozenset(current or ())
    if chain in failed:
        return failed - {chain}, True
    if failed:
        log.info("Stop of chain %s rejected: chain %s already stopped.", chain.value, ",".join(sorted(c.value for c in failed)))
        return failed, False
    return frozenset({chain}), True


def can_toggle(current: AbstractSet[Chain], chain: Chain) -> bool:
    failed = frozenset(current or ())
    return chain in failed or not failed
