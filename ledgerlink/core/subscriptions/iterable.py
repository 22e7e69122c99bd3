import asyncio
from enum import Enum
from typing import Any, AsyncIterator

from ledgerlink.core.errors import CancellationError, TransportError
from ledgerlink.core.helpers.abort import AbortController, AbortSignal, abort_signal_any
from ledgerlink.core.ports.publisher import DataPublisher


class _Kind(Enum):
    data = "data"
    error = "error"
    abort = "abort"


async def iterate_publisher(
    publisher: DataPublisher,
    *,
    data_channel_name: str,
    error_channel_name: str,
    signal: AbortSignal,
) -> AsyncIterator[Any]:
    """
    Consume a publisher as an async iterator.

    Registration happens when iteration starts: messages published before
    the first `__anext__()` are not seen. Every iterator owns its queue, so
    several iterators over the same publisher progress independently.

    The iterator:
    - yields each payload published on `data_channel_name`
    - raises the payload published on `error_channel_name` (wrapped in a
      TransportError when it is not an exception)
    - raises CancellationError once `signal` aborts

    Leaving the iteration for any reason removes its registrations.
    """
    signal.throw_if_aborted()

    queue: asyncio.Queue[tuple[_Kind, Any]] = asyncio.Queue()
    registration = AbortController()
    scope = abort_signal_any(signal, registration.signal)

    def on_error(*args: Any) -> None:
        queue.put_nowait((_Kind.error, args[0] if args else None))

    publisher.on(data_channel_name, lambda data: queue.put_nowait((_Kind.data, data)), signal=scope)
    publisher.on(error_channel_name, on_error, signal=scope)
    signal.add_listener(
        lambda reason: queue.put_nowait((_Kind.abort, reason)),
        signal=registration.signal
    )

    try:
        while True:
            kind, value = await queue.get()
            if kind is _Kind.data:
                yield value
            elif kind is _Kind.error:
                if isinstance(value, BaseException):
                    raise value
                raise TransportError(f"Subscription failed: {value!r}")
            else:
                raise CancellationError(value)
    finally:
        registration.abort()
