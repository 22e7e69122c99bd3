import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable

from ledgerlink.core.helpers.abort import AbortSignal, Unsubscribe

_MISSING: Any = object()


@dataclass(frozen=True)
class Event:
    """An event that carries no payload."""
    type: str


@dataclass(frozen=True)
class CustomEvent(Event):
    """An event carrying a payload in `detail`."""
    detail: Any = None


EventListener = Callable[[Event], None]


class EventEmitter:
    """
    Synchronous event source with named channels.

    Listeners are called in registration order each time an event of
    their type is dispatched. A failing listener is logged and does not
    prevent delivery to the remaining listeners. Listeners added or
    removed during a dispatch only take effect from the next dispatch.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[EventListener]] = defaultdict(list)
        self._logger = logging.getLogger("core.subscriptions.emitter")

    def add_event_listener(
        self,
        type: str,
        listener: EventListener,
        *,
        signal: AbortSignal | None = None
    ) -> Unsubscribe:
        """
        Register `listener` and return a function removing it again,
        together with its registration on `signal`.
        """
        unscope: Unsubscribe | None = None
        if signal is not None:
            if signal.aborted:
                return lambda: None
            unscope = signal.add_listener(lambda _: self.remove_event_listener(type, listener))

        self._listeners[type].append(listener)

        def remove() -> None:
            self.remove_event_listener(type, listener)
            if unscope is not None:
                unscope()

        return remove

    def remove_event_listener(self, type: str, listener: EventListener) -> None:
        listeners = self._listeners.get(type)
        if not listeners:
            return

        for index, registered in enumerate(listeners):
            if registered is listener:
                del listeners[index]
                break

        if not listeners:
            del self._listeners[type]

    def listener_count(self, type: str) -> int:
        return len(self._listeners.get(type, ()))

    def dispatch_event(self, event: Event) -> None:
        for listener in list(self._listeners.get(event.type, ())):
            try:
                listener(event)
            except Exception as ex:
                self._logger.error(
                    f"Listener for {event.type!r} failed: {ex}", exc_info=ex
                )

    def emit(self, type: str, payload: Any = _MISSING) -> None:
        """Dispatch an Event, or a CustomEvent when a payload is given."""
        if payload is _MISSING:
            self.dispatch_event(Event(type))
        else:
            self.dispatch_event(CustomEvent(type, payload))
