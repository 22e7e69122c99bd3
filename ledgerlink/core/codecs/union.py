from typing import Any, Mapping, Sequence

from ledgerlink.core.codecs.base import (
    Buffer,
    Codec,
    Decoder,
    Encoder,
    combine_codec,
    write_bytes,
)
from ledgerlink.core.codecs.numbers import NumberCodec, get_u8_codec
from ledgerlink.core.errors import CodecError, UnknownVariantError


def _union_fixed_size(size: NumberCodec, variants: Sequence[Encoder[Any] | Decoder[Any]]) -> int | None:
    sizes = {variant.fixed_size for variant in variants}
    if len(sizes) != 1 or None in sizes:
        return None
    return size.fixed_size + sizes.pop()


class DiscriminatedUnionEncoder(Encoder[Mapping[str, Any]]):
    """
    Tagged union over a closed set of variants.

    Each variant is a (discriminator value, encoder) pair. The value to
    encode is a mapping whose `discriminator` key selects the variant;
    on the wire the variant's position in `variants` is written with
    the `size` number codec, followed by the variant's own encoding.
    """

    def __init__(
        self,
        variants: Sequence[tuple[Any, Encoder[Any]]],
        discriminator: str = "kind",
        size: NumberCodec | None = None,
    ) -> None:
        self.variants = tuple(variants)
        self.discriminator = discriminator
        self._size = size or get_u8_codec()
        self._indexes = {name: index for index, (name, _) in enumerate(self.variants)}
        self.fixed_size = _union_fixed_size(self._size, [encoder for _, encoder in self.variants])

    def _variant(self, value: Mapping[str, Any]) -> tuple[int, Encoder[Any]]:
        try:
            name = value[self.discriminator]
        except KeyError:
            raise CodecError(
                f"Union value is missing discriminator [{self.discriminator}]."
            ) from None

        index = self._indexes.get(name)
        if index is None:
            raise UnknownVariantError(name, list(self._indexes))

        return index, self.variants[index][1]

    def get_size_from_value(self, value: Mapping[str, Any]) -> int:
        if self.fixed_size is not None:
            return self.fixed_size

        _, encoder = self._variant(value)
        return self._size.fixed_size + encoder.get_size_from_value(value)

    def encode(self, value: Mapping[str, Any]) -> bytes:
        index, encoder = self._variant(value)
        return self._size.encode(index) + encoder.encode(value)

    def write(self, value: Mapping[str, Any], buffer: bytearray, offset: int) -> int:
        return write_bytes("union", buffer, offset, self.encode(value))


class DiscriminatedUnionDecoder(Decoder[dict[str, Any]]):
    """
    Reads the variant index first, then dispatches to that variant's
    decoder. Variant decoders must produce mappings; the discriminator
    value is added back under the `discriminator` key.
    """

    def __init__(
        self,
        variants: Sequence[tuple[Any, Decoder[Any]]],
        discriminator: str = "kind",
        size: NumberCodec | None = None,
    ) -> None:
        self.variants = tuple(variants)
        self.discriminator = discriminator
        self._size = size or get_u8_codec()
        self.fixed_size = _union_fixed_size(self._size, [decoder for _, decoder in self.variants])

    def read(self, data: Buffer, offset: int = 0) -> tuple[dict[str, Any], int]:
        index, prefix = self._size.read(data, offset)
        if index >= len(self.variants):
            raise UnknownVariantError(index, list(range(len(self.variants))))

        name, decoder = self.variants[index]
        fields, consumed = decoder.read(data, offset + prefix)
        return {self.discriminator: name, **fields}, prefix + consumed


def get_discriminated_union_encoder(
    variants: Sequence[tuple[Any, Encoder[Any]]],
    discriminator: str = "kind",
    size: NumberCodec | None = None,
) -> DiscriminatedUnionEncoder:
    return DiscriminatedUnionEncoder(variants, discriminator, size)


def get_discriminated_union_decoder(
    variants: Sequence[tuple[Any, Decoder[Any]]],
    discriminator: str = "kind",
    size: NumberCodec | None = None,
) -> DiscriminatedUnionDecoder:
    return DiscriminatedUnionDecoder(variants, discriminator, size)


def get_discriminated_union_codec(
    variants: Sequence[tuple[Any, Codec[Any]]],
    discriminator: str = "kind",
    size: NumberCodec | None = None,
) -> Codec[Any]:
    return combine_codec(
        DiscriminatedUnionEncoder(variants, discriminator, size),
        DiscriminatedUnionDecoder(variants, discriminator, size),
    )
