# -*- coding: utf-8 -*-
"""In-process events between snapshot editors and the compute orchestrator.

Editors publish InputChanged; the orchestrator publishes ComputeStarted and
Computed (with the result dict of PowerComputeService). No UI dependency.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Type

from core.sections import Section

log = logging.getLogger(__name__)

Handler = Callable[[Any], None]


@dataclass(frozen=True)
class InputChanged:
    section: Section
    reason: str = "edit"


@dataclass(frozen=True)
class ComputeStarted:
    compute_id: int = 0
    reason: str = "auto"
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True)
class Computed:
    result: Optional[Dict[str, Any]] = None
    compute_id: int = 0
    reason: str = "auto"
    timestamp: float = field(default_factory=time.time)


class EventBus:
    """Synchronous dispatch by exact event type."""

    def __init__(self) -> None:
        self._handlers: Dict[Type[Any], List[Handler]] = {}

    def subscribe(self, event_type: Type[Any], handler: Handler) -> None:
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: Type[Any], handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Any) -> int:
        """Deliver ``event``; returns how many handlers ran without raising."""
        delivered = 0
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception:
                log.warning("Handler %r failed on %s.", handler, type(event).__name__, exc_info=True)
                continue
            delivered += 1
        return delivered
