from typing import Any, Callable, Mapping, Sequence, TypeVar

from ledgerlink.core.codecs.base import (
    Buffer,
    Codec,
    Decoder,
    Encoder,
    combine_codec,
    sum_fixed_sizes,
    write_bytes,
)
from ledgerlink.core.errors import CodecError

A = TypeVar("A")
B = TypeVar("B")

StructValue = dict[str, Any]


class StructEncoder(Encoder[Mapping[str, Any]]):
    """
    Encodes a mapping as the concatenation of its fields, in the order
    the fields are declared. There is no padding between fields.

    The struct is fixed-size if and only if every field is fixed-size.
    Keys of the value that are not declared fields are ignored.
    """

    def __init__(self, fields: Sequence[tuple[str, Encoder[Any]]]) -> None:
        self.fields = tuple(fields)
        self.fixed_size = sum_fixed_sizes(encoder for _, encoder in self.fields)

    def get_size_from_value(self, value: Mapping[str, Any]) -> int:
        if self.fixed_size is not None:
            return self.fixed_size

        return sum(
            encoder.get_size_from_value(self._field(value, name))
            for name, encoder in self.fields
        )

    def encode(self, value: Mapping[str, Any]) -> bytes:
        buffer = bytearray(self.get_size_from_value(value))
        offset = 0
        for name, encoder in self.fields:
            offset = encoder.write(self._field(value, name), buffer, offset)

        return bytes(buffer)

    def write(self, value: Mapping[str, Any], buffer: bytearray, offset: int) -> int:
        # all-or-nothing: a field failing validation leaves buffer untouched
        return write_bytes("struct", buffer, offset, self.encode(value))

    @staticmethod
    def _field(value: Mapping[str, Any], name: str) -> Any:
        try:
            return value[name]
        except KeyError:
            raise CodecError(f"Struct value is missing field [{name}].") from None


class StructDecoder(Decoder[StructValue]):
    """
    Decodes fields sequentially, threading the consumed byte count of
    each field into the offset of the next one. The resulting dict keeps
    the declared field order.
    """

    def __init__(self, fields: Sequence[tuple[str, Decoder[Any]]]) -> None:
        self.fields = tuple(fields)
        self.fixed_size = sum_fixed_sizes(decoder for _, decoder in self.fields)

    def read(self, data: Buffer, offset: int = 0) -> tuple[StructValue, int]:
        values: StructValue = {}
        consumed = 0
        for name, decoder in self.fields:
            values[name], size = decoder.read(data, offset + consumed)
            consumed += size

        return values, consumed


def get_struct_encoder(fields: Sequence[tuple[str, Encoder[Any]]]) -> StructEncoder:
    return StructEncoder(fields)


def get_struct_decoder(fields: Sequence[tuple[str, Decoder[Any]]]) -> StructDecoder:
    return StructDecoder(fields)


def get_struct_codec(fields: Sequence[tuple[str, Codec[Any]]]) -> Codec[Any]:
    return combine_codec(StructEncoder(fields), StructDecoder(fields))


class TransformEncoder(Encoder[B]):
    """Encodes a B by mapping it to an A first (`unmap`), keeping A's layout."""

    def __init__(self, encoder: Encoder[A], unmap: Callable[[B], A]) -> None:
        self._encoder = encoder
        self._unmap = unmap
        self.fixed_size = encoder.fixed_size

    def get_size_from_value(self, value: B) -> int:
        return self._encoder.get_size_from_value(self._unmap(value))

    def write(self, value: B, buffer: bytearray, offset: int) -> int:
        return self._encoder.write(self._unmap(value), buffer, offset)

    def encode(self, value: B) -> bytes:
        return self._encoder.encode(self._unmap(value))


class TransformDecoder(Decoder[B]):
    """
    Decodes an A and maps it to a B. Exceptions raised by `map` are
    propagated as they are; there is no fallback value.
    """

    def __init__(self, decoder: Decoder[A], map: Callable[[A], B]) -> None:
        self._decoder = decoder
        self._map = map
        self.fixed_size = decoder.fixed_size

    def read(self, data: Buffer, offset: int = 0) -> tuple[B, int]:
        value, consumed = self._decoder.read(data, offset)
        return self._map(value), consumed


def transform_encoder(encoder: Encoder[A], unmap: Callable[[B], A]) -> TransformEncoder[B]:
    return TransformEncoder(encoder, unmap)


def transform_decoder(decoder: Decoder[A], map: Callable[[A], B]) -> TransformDecoder[B]:
    return TransformDecoder(decoder, map)


def transform_codec(
    codec: Codec[A],
    unmap: Callable[[B], A],
    map: Callable[[A], B] | None = None,
) -> Codec[B]:
    """
    Adapt a codec for A into a codec for B.

    When `map` is omitted the decoder side is left untouched, which is
    useful when only the encoding side needs validation or coercion.
    """
    decoder = transform_decoder(codec, map) if map is not None else codec
    return combine_codec(transform_encoder(codec, unmap), decoder)
