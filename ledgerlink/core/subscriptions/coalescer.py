import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from ledgerlink.core.helpers.abort import AbortController, AbortSignal
from ledgerlink.core.helpers.stable import canonicalize
from ledgerlink.core.models.message import RpcRequest
from ledgerlink.core.ports.publisher import DataPublisher
from ledgerlink.core.ports.transport import SubscriptionTransport


@dataclass(eq=False)
class CacheEntry:
    """
    One underlying subscription shared by every logical subscriber of
    the same canonical request.
    """
    controller: AbortController
    """
    Internal handle; aborting it tears the underlying subscription down.
    """

    publisher: asyncio.Future[DataPublisher]
    """
    Pending or resolved result of the underlying transport.
    """

    loop: asyncio.AbstractEventLoop
    """
    Loop on which deferred teardown checks are scheduled.
    """

    subscriber_count: int = field(default=0)
    """
    Number of logical subscribers that have not aborted yet.
    """


class SubscriptionCoalescer(SubscriptionTransport):
    """
    Subscription transport that shares one underlying subscription among
    all callers asking for the same thing.

    Two requests are the same when their method name and parameters
    canonicalize to the same key (see `canonicalize`), regardless of the
    key order of the parameter mappings. The first caller for a key opens
    the underlying subscription; later callers reuse the pending or
    resolved publisher and increment the subscriber count.

    The underlying subscription is aborted when:
    - the last subscriber aborts its signal and nobody resubscribes to
      the same key before the end of the current loop iteration, or
    - the shared publisher emits on its "error" channel, in which case
      every subscriber observes the error and the next request for the
      key opens a fresh subscription.

    A failure of the underlying transport while opening is raised to
    every waiting caller and evicts the entry as well.

    The cache belongs to this instance only and is mutated from the event
    loop thread. There is no capacity limit: an entry lives exactly as
    long as it has subscribers.
    """

    def __init__(self, transport: SubscriptionTransport) -> None:
        self._transport = transport
        self._cache: dict[str, CacheEntry] = {}
        self._logger = logging.getLogger("core.subscriptions.coalescer")

    @property
    def active_subscriptions(self) -> int:
        """Number of canonical requests currently backed by a subscription."""
        return len(self._cache)

    def subscriber_count(self, request: RpcRequest) -> int:
        entry = self._cache.get(canonicalize(request.method_name, request.params))
        return entry.subscriber_count if entry is not None else 0

    async def __call__(self, *, request: RpcRequest, signal: AbortSignal) -> DataPublisher:
        signal.throw_if_aborted()

        key = canonicalize(request.method_name, request.params)
        entry = self._cache.get(key)
        if entry is None:
            self._logger.debug(f"Opening subscription {key}")
            entry = self._open(key, request)
        else:
            self._logger.debug(f"Reusing subscription {key}")

        entry.subscriber_count += 1
        released = False

        def release(_: Any = None) -> None:
            nonlocal released
            if released:
                return
            released = True
            unsubscribe()
            self._release(key, entry)

        # dropped as soon as the shared subscription is torn down
        unsubscribe = signal.add_listener(release, signal=entry.controller.signal)

        try:
            return await asyncio.shield(entry.publisher)
        except asyncio.CancelledError:
            release()
            raise

    def _open(self, key: str, request: RpcRequest) -> CacheEntry:
        loop = asyncio.get_running_loop()
        controller = AbortController()
        publisher = asyncio.ensure_future(
            self._transport(request=request, signal=controller.signal)
        )

        entry = CacheEntry(controller=controller, publisher=publisher, loop=loop)
        self._cache[key] = entry
        publisher.add_done_callback(lambda task: self._on_opened(key, entry, task))
        return entry

    def _on_opened(self, key: str, entry: CacheEntry, task: asyncio.Future[DataPublisher]) -> None:
        if task.cancelled():
            self._teardown(key, entry, None)
            return

        if ex := task.exception():
            self._logger.warning(f"Failed to open subscription {key}: {ex}")
            self._teardown(key, entry, ex)
            return

        if entry.controller.signal.aborted:
            return

        def on_error(*args: Any) -> None:
            error = args[0] if args else None
            self._logger.warning(f"Subscription {key} failed: {error}")
            self._teardown(key, entry, error)

        task.result().on("error", on_error, signal=entry.controller.signal)

    def _release(self, key: str, entry: CacheEntry) -> None:
        entry.subscriber_count -= 1
        if entry.subscriber_count == 0:
            # give a same-iteration resubscribe the chance to reuse the entry
            entry.loop.call_soon(self._teardown_if_idle, key, entry)

    def _teardown_if_idle(self, key: str, entry: CacheEntry) -> None:
        if entry.subscriber_count == 0:
            self._logger.debug(f"Tearing down subscription {key}")
            self._teardown(key, entry, None)

    def _teardown(self, key: str, entry: CacheEntry, reason: Any) -> None:
        if self._cache.get(key) is entry:
            del self._cache[key]
        entry.controller.abort(reason)


def get_transport_with_subscription_coalescing(transport: SubscriptionTransport) -> SubscriptionCoalescer:
    return SubscriptionCoalescer(transport)
