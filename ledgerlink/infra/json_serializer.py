import json
from typing import Any

from ledgerlink.core.ports.serializer import Serializer


class JsonSerializer(Serializer):
    """
    JSON implementation of the Serializer interface.

    - compact UTF-8 output
    - integers of any size are written and read back exactly, which
      matters for u64/u128 quantities
    """
    def serialize(self, message: Any) -> bytes:
        return json.dumps(message, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return json.loads(data)
