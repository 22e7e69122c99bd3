from ledgerlink.core.codecs.base import Buffer, Codec, check_buffer_size, write_bytes
from ledgerlink.core.codecs.numbers import NumberCodec, get_u8_codec
from ledgerlink.core.errors import DomainValidationError


class BooleanCodec(Codec[bool]):
    """
    Boolean stored as an unsigned integer, one byte unless another
    number codec is given. Only the value 1 decodes as True.
    """

    def __init__(self, size: NumberCodec | None = None) -> None:
        self._size = size or get_u8_codec()
        self.fixed_size = self._size.fixed_size

    def write(self, value: bool, buffer: bytearray, offset: int) -> int:
        if not isinstance(value, bool):
            raise DomainValidationError(
                f"bool expected a boolean, got {type(value).__name__}.", value
            )
        return self._size.write(int(value), buffer, offset)

    def read(self, data: Buffer, offset: int = 0) -> tuple[bool, int]:
        value, consumed = self._size.read(data, offset)
        return value == 1, consumed


class FixedBytesCodec(Codec[bytes]):
    """Byte array of an exact length, copied as is."""

    def __init__(self, size: int) -> None:
        self.fixed_size = size
        self.name = f"bytes[{size}]"

    def write(self, value: bytes, buffer: bytearray, offset: int) -> int:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise DomainValidationError(
                f"{self.name} expected bytes, got {type(value).__name__}.", value
            )

        if len(value) != self.fixed_size:
            raise DomainValidationError(
                f"{self.name} expected {self.fixed_size} bytes, got {len(value)}.", value
            )

        return write_bytes(self.name, buffer, offset, value)

    def read(self, data: Buffer, offset: int = 0) -> tuple[bytes, int]:
        size = self.fixed_size
        check_buffer_size(self.name, data, offset, size)
        return bytes(data[offset:offset + size]), size


def get_boolean_codec(size: NumberCodec | None = None) -> BooleanCodec:
    return BooleanCodec(size)


def get_fixed_bytes_codec(size: int) -> FixedBytesCodec:
    return FixedBytesCodec(size)
