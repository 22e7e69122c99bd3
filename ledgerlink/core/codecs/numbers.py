from ledgerlink.core.codecs.base import Buffer, Codec, check_buffer_size, write_bytes
from ledgerlink.core.errors import DomainValidationError, OutOfRangeError


def assert_number_in_range(name: str, value: object, minimum: int, maximum: int) -> None:
    # bool is an int subclass and float would lose precision above 2**53
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainValidationError(
            f"{name} expected an integer, got {type(value).__name__}.", value
        )

    if value < minimum or value > maximum:
        raise OutOfRangeError(name, value, minimum, maximum)


class NumberCodec(Codec[int]):
    """
    Fixed-width unsigned little-endian integer.

    Values are plain Python ints at the boundary, so every width up to
    128 bits round-trips exactly.
    """

    def __init__(self, name: str, size: int) -> None:
        self.name = name
        self.fixed_size = size
        self.minimum = 0
        self.maximum = 2 ** (8 * size) - 1

    def __repr__(self) -> str:
        return f"NumberCodec({self.name})"

    def write(self, value: int, buffer: bytearray, offset: int) -> int:
        assert_number_in_range(self.name, value, self.minimum, self.maximum)
        return write_bytes(self.name, buffer, offset, value.to_bytes(self.fixed_size, "little"))

    def read(self, data: Buffer, offset: int = 0) -> tuple[int, int]:
        size = self.fixed_size
        check_buffer_size(self.name, data, offset, size)
        return int.from_bytes(data[offset:offset + size], "little"), size


def get_u8_codec() -> NumberCodec:
    return NumberCodec("u8", 1)


def get_u16_codec() -> NumberCodec:
    return NumberCodec("u16", 2)


def get_u32_codec() -> NumberCodec:
    return NumberCodec("u32", 4)


def get_u64_codec() -> NumberCodec:
    return NumberCodec("u64", 8)


def get_u128_codec() -> NumberCodec:
    return NumberCodec("u128", 16)
