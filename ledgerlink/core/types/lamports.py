from functools import lru_cache
from typing import NewType

from ledgerlink.core.codecs.base import Codec, Decoder, Encoder, combine_codec
from ledgerlink.core.codecs.combinators import transform_decoder, transform_encoder
from ledgerlink.core.codecs.numbers import NumberCodec, get_u64_codec
from ledgerlink.core.errors import LamportsOutOfRangeError

Lamports = NewType("Lamports", int)
"""
An amount of the ledger's smallest currency unit.

An int in client code and an u64 on the ledger. Only `lamports()`
should be used to obtain one from untrusted input.
"""

MAX_U64_VALUE = 2**64 - 1


@lru_cache
def _u64() -> NumberCodec:
    return get_u64_codec()


def is_lamports(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= MAX_U64_VALUE


def assert_is_lamports(value: object) -> None:
    if not is_lamports(value):
        raise LamportsOutOfRangeError(value)


def lamports(value: int) -> Lamports:
    """
    Validate an untrusted integer and return it typed as Lamports.

    Raises LamportsOutOfRangeError (a DomainValidationError) for any value
    outside [0, 2**64 - 1]. Values are never clamped.
    """
    assert_is_lamports(value)
    return Lamports(value)


def get_lamports_encoder(inner: NumberCodec) -> Encoder[Lamports]:
    """
    Encoder for Lamports over any number codec, for compact formats that
    store amounts in fewer than 64 bits. The amount is validated first,
    then the inner codec checks that it fits its own width.
    """
    return transform_encoder(inner, lamports)


def get_lamports_decoder(inner: NumberCodec) -> Decoder[Lamports]:
    return transform_decoder(inner, lamports)


def get_lamports_codec(inner: NumberCodec) -> Codec[Lamports]:
    return combine_codec(get_lamports_encoder(inner), get_lamports_decoder(inner))


def get_default_lamports_encoder() -> Encoder[Lamports]:
    """Lamports as 8 little-endian bytes."""
    return get_lamports_encoder(_u64())


def get_default_lamports_decoder() -> Decoder[Lamports]:
    return get_lamports_decoder(_u64())


def get_default_lamports_codec() -> Codec[Lamports]:
    return combine_codec(get_default_lamports_encoder(), get_default_lamports_decoder())
