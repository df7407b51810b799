# -*- coding: utf-8 -*-
from app.events import Computed, EventBus, InputChanged
from core.sections import Section


def test_subscribe_emit_unsubscribe():
    bus = EventBus()
    got = []
    bus.subscribe(InputChanged, got.append)
    bus.subscribe(InputChanged, got.append)
    assert bus.emit(InputChanged(Section.RACKS, reason="import")) == 1
    assert bus.emit(Computed(result={})) == 0
    assert [e.section for e in got] == [Section.RACKS]

    bus.unsubscribe(InputChanged, got.append)
    bus.emit(InputChanged(Section.RACKS))
    assert len(got) == 1


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    got = []

    def broken(_event):
        raise ValueError("broken")

    bus.subscribe(Computed, broken)
    bus.subscribe(Computed, got.append)
    assert bus.emit(Computed(result={"ok": True}, compute_id=4)) == 1
    assert got[0].result == {"ok": True}
    assert got[0].compute_id == 4
