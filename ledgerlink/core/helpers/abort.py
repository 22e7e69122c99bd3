import asyncio
import logging
from typing import Any, Callable

from ledgerlink.core.errors import CancellationError

AbortListener = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class _Registration:
    __slots__ = ("listener", "unscope")

    def __init__(self, listener: AbortListener) -> None:
        self.listener = listener
        self.unscope: Unsubscribe | None = None


class AbortSignal:
    """
    Cooperative cancellation token.

    A signal starts live and can be aborted exactly once, by its owning
    AbortController. Listeners registered with `add_listener()` are called
    synchronously, in registration order, with the abort reason. A listener
    added after the abort is never called.

    Every registration is independent: registering the same callable twice
    yields two registrations, each removed by its own unsubscribe function.
    """

    def __init__(self) -> None:
        self.aborted = False
        self.reason: Any = None
        self._registrations: list[_Registration] = []
        self._event: asyncio.Event | None = None
        self._logger = logging.getLogger("core.helpers.abort")

    def add_listener(
        self,
        listener: AbortListener,
        *,
        signal: "AbortSignal | None" = None
    ) -> Unsubscribe:
        """
        Register `listener` to run once when this signal aborts.

        If `signal` is given, the registration is dropped as soon as that
        other signal aborts. Whichever way the registration ends, nothing is
        left behind on either signal. Returns a function removing the
        registration; calling it more than once is harmless.
        """
        if self.aborted or (signal is not None and signal.aborted):
            return lambda: None

        registration = _Registration(listener)
        self._registrations.append(registration)

        if signal is not None:
            registration.unscope = signal.add_listener(lambda _: self._discard(registration))

        def remove() -> None:
            self._discard(registration)
            if registration.unscope is not None:
                registration.unscope()

        return remove

    @property
    def listener_count(self) -> int:
        """Number of live registrations waiting for the abort."""
        return len(self._registrations)

    def throw_if_aborted(self) -> None:
        if self.aborted:
            raise CancellationError(self.reason)

    async def wait(self) -> Any:
        """Suspend until the signal aborts and return the abort reason."""
        if not self.aborted:
            if self._event is None:
                self._event = asyncio.Event()
            await self._event.wait()
        return self.reason

    def _discard(self, registration: _Registration) -> None:
        try:
            self._registrations.remove(registration)
        except ValueError:
            pass

    def _abort(self, reason: Any) -> None:
        if self.aborted:
            return

        self.aborted = True
        self.reason = reason
        registrations, self._registrations = self._registrations, []

        if self._event is not None:
            self._event.set()

        for registration in registrations:
            # the scope no longer needs to drop this registration
            if registration.unscope is not None:
                registration.unscope()
            try:
                registration.listener(reason)
            except Exception as ex:
                self._logger.error(f"Abort listener failed: {ex}", exc_info=ex)


class AbortController:
    """Owns an AbortSignal and is the only way to abort it."""

    def __init__(self) -> None:
        self.signal = AbortSignal()

    def abort(self, reason: Any = None) -> None:
        self.signal._abort(reason)


def abort_signal_any(*signals: AbortSignal) -> AbortSignal:
    """Return a signal that aborts as soon as any of `signals` aborts."""
    controller = AbortController()
    for signal in signals:
        if signal.aborted:
            controller.abort(signal.reason)
            break
        signal.add_listener(controller.abort, signal=controller.signal)

    return controller.signal
