# -*- coding: utf-8 -*-
"""Qt-backed recompute orchestrator (debounced with a single-shot QTimer).

The power computation is fast and synchronous, so it runs on the GUI thread
when the timer fires; the timer only coalesces bursts of edits.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from app.events import ComputeStarted, Computed, EventBus, InputChanged
from core.models.power import PowerSnapshot
from services.compute.orchestrator_core import ComputeOrchestratorCore, is_stale_result
from services.compute.power_compute_service import PowerComputeService

log = logging.getLogger(__name__)

try:
    from PyQt5.QtCore import QObject, QTimer, pyqtSignal
except ImportError:  # pragma: no cover - optional for test environments
    QObject = None
    QTimer = None
    pyqtSignal = None


if QObject is not None:

    class QtComputeOrchestrator(QObject):
        computed = pyqtSignal(object)

        def __init__(
            self,
            *,
            snapshot_provider: Callable[[], PowerSnapshot],
            event_bus: Optional[EventBus] = None,
            service: Optional[PowerComputeService] = None,
            debounce_ms: int = 150,
        ) -> None:
            super().__init__()
            self._snapshot_provider = snapshot_provider
            self._bus = event_bus
            self._service = service or PowerComputeService()
            self._core = ComputeOrchestratorCore(debounce_ms=debounce_ms)
            self._timer = QTimer(self)
            self._timer.setSingleShot(True)
            self._timer.setInterval(int(debounce_ms))
            self._timer.timeout.connect(self._run_compute)
            self._computing = False
            self._rerun = False
            self.last_result: Optional[dict] = None

            if self._bus is not None:
                self._bus.subscribe(InputChanged, self._on_input_changed)

        def _on_input_changed(self, event: InputChanged) -> None:
            self._core.mark_dirty(event.section, reason=event.reason)
            self._timer.start()

        def force_compute(self, reason: str = "manual") -> None:
            self._run_compute(reason=reason, force=True)

        def _run_compute(self, *, reason: str = "auto", force: bool = False) -> None:
            if self._computing:
                self._rerun = True
                return
            if not force and not self._core.should_run():
                if self._core.has_dirty():
                    self._timer.start()
                return
            dirty = self._core.pop_dirty()
            self._computing = True
            compute_id = self._core.next_compute_id()
            try:
                log.debug("Power compute start id=%s sections=%s", compute_id, sorted(s.value for s in dirty))
                if self._bus is not None:
                    self._bus.emit(ComputeStarted(compute_id=compute_id, reason=reason))
                result = self._service.compute(self._snapshot_provider())
                self._on_compute_finished(compute_id, result, reason)
            except Exception:
                log.exception("Power compute failed id=%s", compute_id)
            finally:
                self._computing = False
                if self._rerun or self._core.has_dirty():
                    self._rerun = False
                    self._timer.start()

        def _on_compute_finished(self, compute_id: int, result: dict, reason: str) -> None:
            if is_stale_result(self._core.current_compute_id, compute_id):
                log.debug("Discarding stale power result id=%s current=%s", compute_id, self._core.current_compute_id)
                return
            self.last_result = result
            self.computed.emit(result)
            if self._bus is not None:
                self._bus.emit(Computed(result=result, compute_id=compute_id, reason=reason))

else:

    class QtComputeOrchestrator:  # pragma: no cover
        def __init__(self, *args: Any, **kwargs: Any) -> None:
            raise RuntimeError("PyQt5 is required to use QtComputeOrchestrator")
