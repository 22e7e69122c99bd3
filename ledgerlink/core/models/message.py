import itertools
from dataclasses import dataclass, asdict, field
from typing import Any

_message_ids = itertools.count()


@dataclass(frozen=True)
class RpcRequest:
    """
    A logical JSON-RPC call: the method to invoke and its parameters.

    The same structure describes a one-shot request and a subscription
    request; the transport decides how it is carried.
    """
    method_name: str
    """
    name of the remote method, e.g. "getSlot" or "slotSubscribe"
    """

    params: Any = field(default_factory=list)
    """
    JSON-serializable parameters, usually a list
    """

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dictionary representation of the request."""
        return asdict(self)


def create_rpc_message(request: RpcRequest) -> dict[str, Any]:
    """
    Build the JSON-RPC 2.0 envelope for `request`.

    Message ids are unique within the process and rendered as strings.
    """
    return {
        "id": str(next(_message_ids)),
        "jsonrpc": "2.0",
        "method": request.method_name,
        "params": request.params,
    }
