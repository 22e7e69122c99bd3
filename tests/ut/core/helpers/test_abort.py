import asyncio
import pytest

from ledgerlink.core.errors import CancellationError
from ledgerlink.core.helpers.abort import AbortController, abort_signal_any


@pytest.mark.ut
def test_listener_called_once_with_reason():
    controller = AbortController()
    calls = []

    controller.signal.add_listener(calls.append)
    controller.abort("stop")
    controller.abort("again")

    assert calls == ["stop"]
    assert controller.signal.aborted is True
    assert controller.signal.reason == "stop"


@pytest.mark.ut
def test_listener_added_after_abort_is_never_called():
    controller = AbortController()
    controller.abort()
    calls = []

    remove = controller.signal.add_listener(calls.append)
    remove()

    assert calls == []


@pytest.mark.ut
def test_same_listener_registered_twice_is_independent():
    controller = AbortController()
    calls = []

    remove_first = controller.signal.add_listener(calls.append)
    controller.signal.add_listener(calls.append)
    remove_first()
    remove_first()
    controller.abort(1)

    assert calls == [1]


@pytest.mark.ut
def test_scoped_listener_dropped_when_scope_aborts():
    controller = AbortController()
    scope = AbortController()
    calls = []

    controller.signal.add_listener(calls.append, signal=scope.signal)
    scope.abort()
    controller.abort("late")

    assert calls == []


@pytest.mark.ut
def test_failing_listener_does_not_stop_others():
    controller = AbortController()
    calls = []

    def boom(_):
        raise RuntimeError("boom")

    controller.signal.add_listener(boom)
    controller.signal.add_listener(calls.append)
    controller.abort("x")

    assert calls == ["x"]


@pytest.mark.ut
def test_throw_if_aborted():
    controller = AbortController()
    controller.signal.throw_if_aborted()

    controller.abort("why")
    with pytest.raises(CancellationError) as exc:
        controller.signal.throw_if_aborted()
    assert exc.value.reason == "why"


@pytest.mark.ut
@pytest.mark.asyncio
async def test_wait_until_aborted():
    controller = AbortController()

    task = asyncio.create_task(controller.signal.wait())
    await asyncio.sleep(0)
    assert not task.done()

    controller.abort("done")
    assert await task == "done"
    assert await controller.signal.wait() == "done"


@pytest.mark.ut
def test_abort_signal_any():
    first = AbortController()
    second = AbortController()

    combined = abort_signal_any(first.signal, second.signal)
    assert combined.aborted is False

    second.abort("second")
    assert combined.aborted is True
    assert combined.reason == "second"


@pytest.mark.ut
def test_abort_signal_any_already_aborted():
    first = AbortController()
    first.abort("early")

    combined = abort_signal_any(first.signal, AbortController().signal)
    assert combined.aborted is True
    assert combined.reason == "early"


@pytest.mark.ut
def test_scoped_registration_leaves_nothing_on_scope_after_abort():
    controller, scope = AbortController(), AbortController()
    calls = []

    controller.signal.add_listener(calls.append, signal=scope.signal)
    assert scope.signal.listener_count == 1

    controller.abort("stop")

    assert calls == ["stop"]
    assert scope.signal.listener_count == 0


@pytest.mark.ut
def test_remove_releases_scope_registration():
    controller, scope = AbortController(), AbortController()

    remove = controller.signal.add_listener(lambda reason: None, signal=scope.signal)
    remove()

    assert controller.signal.listener_count == 0
    assert scope.signal.listener_count == 0
