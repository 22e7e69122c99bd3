from typing import Any, Callable, Protocol

from ledgerlink.core.helpers.abort import AbortSignal, Unsubscribe

Subscriber = Callable[..., Any]


class DataPublisher(Protocol):
    """
    Channel-scoped subscription handle returned by live subscriptions.

    `on()` registers `subscriber` for every message published on
    `channel_name` from now on; messages published before the call are
    not replayed. The returned function, or aborting `signal`, removes
    that registration and only that one.
    """

    def on(
        self,
        channel_name: str,
        subscriber: Subscriber,
        *,
        signal: AbortSignal | None = None
    ) -> Unsubscribe:
        ...
