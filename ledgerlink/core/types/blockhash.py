from typing import NewType

from ledgerlink.core.codecs.base import Codec, Decoder, Encoder, combine_codec
from ledgerlink.core.codecs.combinators import transform_decoder, transform_encoder
from ledgerlink.core.codecs.primitives import get_fixed_bytes_codec
from ledgerlink.core.errors import DomainValidationError

Blockhash = NewType("Blockhash", bytes)
"""32-byte hash identifying a block, kept in its raw binary form."""

BLOCKHASH_SIZE = 32


def is_blockhash(value: object) -> bool:
    return isinstance(value, (bytes, bytearray)) and len(value) == BLOCKHASH_SIZE


def assert_is_blockhash(value: object) -> None:
    if not is_blockhash(value):
        raise DomainValidationError(
            f"Expected a {BLOCKHASH_SIZE}-byte blockhash, got {value!r}.", value
        )


def blockhash(value: bytes) -> Blockhash:
    assert_is_blockhash(value)
    return Blockhash(bytes(value))


def get_blockhash_encoder() -> Encoder[Blockhash]:
    return transform_encoder(get_fixed_bytes_codec(BLOCKHASH_SIZE), blockhash)


def get_blockhash_decoder() -> Decoder[Blockhash]:
    return transform_decoder(get_fixed_bytes_codec(BLOCKHASH_SIZE), blockhash)


def get_blockhash_codec() -> Codec[Blockhash]:
    return combine_codec(get_blockhash_encoder(), get_blockhash_decoder())
