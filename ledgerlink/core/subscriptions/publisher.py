from ledgerlink.core.helpers.abort import AbortSignal, Unsubscribe
from ledgerlink.core.ports.publisher import DataPublisher, Subscriber
from ledgerlink.core.subscriptions.emitter import CustomEvent, Event, EventEmitter


class EmitterDataPublisher(DataPublisher):
    """
    DataPublisher backed by an EventEmitter.

    Each call to `on()` wraps the subscriber in a fresh listener, so that
    two registrations of the same callable are removed independently.
    Subscribers receive the event's payload when it carries one, and are
    called without arguments otherwise.
    """

    def __init__(self, emitter: EventEmitter) -> None:
        self._emitter = emitter

    def on(
        self,
        channel_name: str,
        subscriber: Subscriber,
        *,
        signal: AbortSignal | None = None
    ) -> Unsubscribe:
        def listener(event: Event) -> None:
            if isinstance(event, CustomEvent):
                subscriber(event.detail)
            else:
                subscriber()

        return self._emitter.add_event_listener(channel_name, listener, signal=signal)


def get_data_publisher_from_emitter(emitter: EventEmitter) -> DataPublisher:
    return EmitterDataPublisher(emitter)
