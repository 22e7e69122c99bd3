from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines how JSON-RPC payloads are turned into request bodies and how
    response bodies are turned back into Python objects.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - able to carry integers of any size without loss
    """

    def serialize(self, message: Any) -> bytes:
        """Encode a payload into bytes suitable for network transport."""

    def deserialize(self, data: bytes) -> Any:
        """Decode bytes received from the network into a Python object."""
