import pytest

from ledgerlink.core.helpers.abort import AbortController
from ledgerlink.core.subscriptions.emitter import CustomEvent, Event, EventEmitter


@pytest.mark.ut
def test_listeners_called_in_order():
    emitter = EventEmitter()
    calls = []

    emitter.add_event_listener("data", lambda event: calls.append(("first", event)))
    emitter.add_event_listener("data", lambda event: calls.append(("second", event)))
    emitter.emit("data", 3)

    assert calls == [("first", CustomEvent("data", 3)), ("second", CustomEvent("data", 3))]


@pytest.mark.ut
def test_emit_without_payload_dispatches_plain_event():
    emitter = EventEmitter()
    events = []

    emitter.add_event_listener("close", events.append)
    emitter.emit("close")
    emitter.emit("close", None)

    assert type(events[0]) is Event
    assert events[1] == CustomEvent("close", None)


@pytest.mark.ut
def test_remove_event_listener_removes_one_registration():
    emitter = EventEmitter()
    events = []

    emitter.add_event_listener("data", events.append)
    emitter.add_event_listener("data", events.append)
    emitter.remove_event_listener("data", events.append)
    emitter.emit("data", 1)

    assert events == [CustomEvent("data", 1)]
    assert emitter.listener_count("data") == 1


@pytest.mark.ut
def test_remove_unknown_listener_is_noop():
    emitter = EventEmitter()
    emitter.remove_event_listener("data", print)
    assert emitter.listener_count("data") == 0


@pytest.mark.ut
def test_signal_removes_listener():
    emitter = EventEmitter()
    controller = AbortController()
    events = []

    emitter.add_event_listener("data", events.append, signal=controller.signal)
    controller.abort()
    emitter.emit("data", 1)

    assert events == []
    assert emitter.listener_count("data") == 0


@pytest.mark.ut
def test_listener_added_during_dispatch_waits_for_next_event():
    emitter = EventEmitter()
    late = []

    def register(_):
        emitter.add_event_listener("data", late.append)

    emitter.add_event_listener("data", register)
    emitter.emit("data", 1)
    assert late == []

    emitter.emit("data", 2)
    assert late == [CustomEvent("data", 2)]


@pytest.mark.ut
def test_remover_also_releases_signal_registration():
    emitter = EventEmitter()
    controller = AbortController()
    events = []

    remove = emitter.add_event_listener("data", events.append, signal=controller.signal)
    remove()
    remove()
    emitter.emit("data", 1)

    assert events == []
    assert controller.signal.listener_count == 0
