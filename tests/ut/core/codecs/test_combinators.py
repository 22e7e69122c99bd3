import pytest

from ledgerlink.core.codecs.base import combine_codec, is_fixed_size
from ledgerlink.core.codecs.combinators import (
    get_struct_codec,
    get_struct_decoder,
    get_struct_encoder,
    transform_codec,
    transform_decoder,
    transform_encoder,
)
from ledgerlink.core.codecs.numbers import get_u8_codec, get_u16_codec, get_u64_codec
from ledgerlink.core.codecs.primitives import get_boolean_codec
from ledgerlink.core.codecs.union import get_discriminated_union_codec
from ledgerlink.core.errors import CodecError, DomainValidationError, OutOfRangeError, ShortBufferError


@pytest.mark.ut
def test_struct_fields_in_declared_order():
    codec = get_struct_codec([("a", get_u64_codec()), ("b", get_u64_codec())])

    data = codec.encode({"b": 2, "a": 1})

    assert codec.fixed_size == 16
    assert data[:8] == get_u64_codec().encode(1)
    assert data[8:] == get_u64_codec().encode(2)

    decoded = codec.decode(data)
    assert decoded == {"a": 1, "b": 2}
    assert list(decoded) == ["a", "b"]


@pytest.mark.ut
def test_struct_ignores_undeclared_keys():
    codec = get_struct_codec([("a", get_u8_codec())])
    assert codec.encode({"a": 7, "extra": "ignored"}) == b"\x07"


@pytest.mark.ut
def test_struct_missing_field():
    codec = get_struct_codec([("a", get_u8_codec()), ("b", get_u8_codec())])

    with pytest.raises(CodecError, match="b"):
        codec.encode({"a": 1})


@pytest.mark.ut
def test_struct_write_is_all_or_nothing():
    codec = get_struct_codec([("a", get_u8_codec()), ("b", get_u8_codec())])
    buffer = bytearray(b"\xee\xee\xee")

    with pytest.raises(OutOfRangeError):
        codec.write({"a": 1, "b": 256}, buffer, 1)

    assert buffer == bytearray(b"\xee\xee\xee")

    assert codec.write({"a": 1, "b": 2}, buffer, 1) == 3
    assert buffer == bytearray(b"\xee\x01\x02")


@pytest.mark.ut
def test_struct_decode_short_buffer():
    codec = get_struct_codec([("a", get_u64_codec()), ("b", get_u64_codec())])

    with pytest.raises(ShortBufferError):
        codec.decode(b"\x00" * 12)


@pytest.mark.ut
def test_variable_size_struct_threads_offsets():
    shape = get_discriminated_union_codec([
        ("empty", get_struct_codec([])),
        ("point", get_struct_codec([("x", get_u16_codec()), ("y", get_u16_codec())])),
    ])
    codec = get_struct_codec([
        ("first", shape),
        ("second", shape),
        ("flag", get_boolean_codec()),
    ])

    value = {
        "first": {"kind": "empty"},
        "second": {"kind": "point", "x": 3, "y": 4},
        "flag": True,
    }

    assert codec.fixed_size is None
    assert codec.get_size_from_value(value) == 1 + 5 + 1

    data = codec.encode(value)
    assert data == b"\x00" + b"\x01\x03\x00\x04\x00" + b"\x01"

    decoded, consumed = codec.read(data + b"trailing")
    assert decoded == value
    assert consumed == 7


@pytest.mark.ut
def test_separate_struct_encoder_and_decoder():
    fields = [("a", get_u16_codec())]
    codec = combine_codec(get_struct_encoder(fields), get_struct_decoder(fields))

    assert codec.decode(codec.encode({"a": 513})) == {"a": 513}


@pytest.mark.ut
def test_transform_codec():
    codec = transform_codec(
        get_u8_codec(),
        lambda text: int(text),
        lambda number: str(number),
    )

    assert codec.fixed_size == 1
    assert codec.encode("42") == b"\x2a"
    assert codec.decode(b"\x2a") == "42"


@pytest.mark.ut
def test_transform_codec_without_map_keeps_decoder():
    codec = transform_codec(get_u8_codec(), lambda value: value * 2)

    assert codec.encode(4) == b"\x08"
    assert codec.decode(b"\x08") == 8


@pytest.mark.ut
def test_transform_decoder_failure_propagates():
    def reject(value):
        raise DomainValidationError("rejected", value)

    decoder = transform_decoder(get_u8_codec(), reject)

    with pytest.raises(DomainValidationError) as exc:
        decoder.decode(b"\x05")
    assert exc.value.value == 5


@pytest.mark.ut
def test_transform_encoder_fails_before_writing():
    def reject(value):
        raise DomainValidationError("rejected", value)

    encoder = transform_encoder(get_u8_codec(), reject)
    buffer = bytearray(b"\xff")

    with pytest.raises(DomainValidationError):
        encoder.write(1, buffer, 0)
    assert buffer == bytearray(b"\xff")


@pytest.mark.ut
def test_combine_codec_checks_sizes():
    with pytest.raises(CodecError):
        combine_codec(get_u8_codec(), get_u16_codec())

    variable = get_discriminated_union_codec([
        ("a", get_struct_codec([("value", get_u8_codec())])),
        ("b", get_struct_codec([("value", get_u16_codec())])),
    ])
    assert not is_fixed_size(variable)

    with pytest.raises(CodecError):
        combine_codec(get_u8_codec(), variable)
