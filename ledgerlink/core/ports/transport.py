from typing import Any, Protocol

from ledgerlink.core.helpers.abort import AbortSignal
from ledgerlink.core.models.message import RpcRequest
from ledgerlink.core.ports.publisher import DataPublisher


class RpcTransport(Protocol):
    """
    Stateless request/response transport.

    Sends one JSON-RPC payload and returns the decoded response. Aborting
    `signal` must stop the request and raise CancellationError; any other
    failure is raised as TransportError. Implementations never retry.
    """

    async def __call__(self, *, payload: Any, signal: AbortSignal | None = None) -> Any:
        ...


class SubscriptionTransport(Protocol):
    """
    Opens one subscription on the remote end.

    The returned publisher delivers notifications until `signal` aborts.
    Aborting must synchronously stop further delivery and release the
    underlying resources. An unrecoverable failure is either raised while
    opening or published later on the "error" channel.
    """

    async def __call__(self, *, request: RpcRequest, signal: AbortSignal) -> DataPublisher:
        ...
