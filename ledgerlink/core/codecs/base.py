from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, TypeVar

from ledgerlink.core.errors import CodecError, ShortBufferError

T = TypeVar("T")

Buffer = bytes | bytearray | memoryview


class Encoder(ABC, Generic[T]):
    """
    Maps a value to its byte representation.

    The size descriptor is either `fixed_size` (every value occupies the
    same number of bytes) or, when `fixed_size` is None, the result of
    `get_size_from_value(value)`. In both cases the number of bytes
    produced by `encode()` equals the descriptor.

    `write()` is the low-level primitive used by composite encoders: it
    writes the value into a preallocated buffer and returns the offset
    right after the last written byte. Validation always happens before
    the first byte is written.
    """
    fixed_size: int | None = None

    def get_size_from_value(self, value: T) -> int:
        if self.fixed_size is None:
            raise NotImplementedError(
                f"{type(self).__name__} must implement get_size_from_value()"
            )
        return self.fixed_size

    @abstractmethod
    def write(self, value: T, buffer: bytearray, offset: int) -> int:
        ...

    def encode(self, value: T) -> bytes:
        buffer = bytearray(self.get_size_from_value(value))
        self.write(value, buffer, 0)
        return bytes(buffer)


class Decoder(ABC, Generic[T]):
    """
    Maps bytes read at an offset back to a value.

    `read()` returns the decoded value together with the number of bytes
    consumed. A fixed size decoder always consumes `fixed_size` bytes; a
    variable size decoder must find its own length in the bytes it reads.
    """
    fixed_size: int | None = None

    @abstractmethod
    def read(self, data: Buffer, offset: int = 0) -> tuple[T, int]:
        ...

    def decode(self, data: Buffer, offset: int = 0) -> T:
        value, _ = self.read(data, offset)
        return value


class Codec(Encoder[T], Decoder[T], ABC):
    """An encoder and a decoder for the same type: decode(encode(v)) == v."""


class CombinedCodec(Codec[T]):
    def __init__(self, encoder: Encoder[T], decoder: Decoder[T]) -> None:
        self.encoder = encoder
        self.decoder = decoder
        self.fixed_size = encoder.fixed_size

    def get_size_from_value(self, value: T) -> int:
        return self.encoder.get_size_from_value(value)

    def write(self, value: T, buffer: bytearray, offset: int) -> int:
        return self.encoder.write(value, buffer, offset)

    def encode(self, value: T) -> bytes:
        return self.encoder.encode(value)

    def read(self, data: Buffer, offset: int = 0) -> tuple[T, int]:
        return self.decoder.read(data, offset)


def combine_codec(encoder: Encoder[T], decoder: Decoder[T]) -> Codec[T]:
    """
    Pair an independently defined encoder and decoder into one codec.

    Both sides must agree on their size descriptor, otherwise the
    resulting codec could not round-trip.
    """
    if is_fixed_size(encoder) != is_fixed_size(decoder):
        raise CodecError(
            "Encoder and decoder must either both be fixed-size or variable-size."
        )

    if encoder.fixed_size != decoder.fixed_size:
        raise CodecError(
            f"Encoder and decoder must have the same fixed size, "
            f"got [{encoder.fixed_size}] and [{decoder.fixed_size}]."
        )

    return CombinedCodec(encoder, decoder)


def is_fixed_size(codec: Encoder[Any] | Decoder[Any]) -> bool:
    return codec.fixed_size is not None


def assert_is_fixed_size(codec: Encoder[Any] | Decoder[Any]) -> None:
    if not is_fixed_size(codec):
        raise CodecError(f"Expected a fixed-size codec, got {type(codec).__name__}.")


def sum_fixed_sizes(codecs: Iterable[Encoder[Any] | Decoder[Any]]) -> int | None:
    """Total fixed size of a sequence of codecs, or None if any is variable."""
    total = 0
    for codec in codecs:
        if codec.fixed_size is None:
            return None
        total += codec.fixed_size
    return total


def check_buffer_size(name: str, data: Buffer, offset: int, expected: int) -> None:
    if offset < 0:
        raise CodecError(f"Codec [{name}] got a negative offset {offset}.")

    available = len(data) - offset
    if available < expected:
        raise ShortBufferError(name, expected, max(available, 0))


def write_bytes(name: str, buffer: bytearray, offset: int, chunk: Buffer) -> int:
    # slice assignment would silently grow the buffer
    check_buffer_size(name, buffer, offset, len(chunk))
    end = offset + len(chunk)
    buffer[offset:end] = chunk
    return end
