import pytest

from ledgerlink.core.errors import DomainValidationError
from ledgerlink.core.types.blockhash import blockhash, get_blockhash_codec, is_blockhash


@pytest.mark.ut
def test_blockhash_requires_32_bytes():
    assert is_blockhash(b"\x01" * 32)
    assert not is_blockhash(b"\x01" * 31)
    assert not is_blockhash("11111111111111111111111111111111")

    with pytest.raises(DomainValidationError):
        blockhash(b"\x01" * 33)


@pytest.mark.ut
def test_blockhash_codec():
    codec = get_blockhash_codec()
    value = blockhash(bytes(range(32)))

    assert codec.fixed_size == 32
    assert codec.encode(value) == bytes(range(32))
    assert codec.decode(bytes(range(32))) == value
