import hashlib

import pytest
from btc_recovery.exceptions import SerializationError, ValidationError
from btc_recovery.utils.encoding import (
    hex_to_bytes, encode_varint, decode_varint, double_sha256
)


def test_hex_to_bytes():
    assert hex_to_bytes("0x0001ff") == b"\x00\x01\xff"
    assert hex_to_bytes("00AB") == b"\x00\xab"
    with pytest.raises(ValidationError):
        hex_to_bytes("zzzz")


@pytest.mark.parametrize("bad", ["abc", "00 11", "0a\n", None])
def test_hex_to_bytes_rejects(bad):
    with pytest.raises(ValidationError):
        hex_to_bytes(bad)


def test_varint_roundtrip():
    for value in [0, 1, 252, 253, 65535, 65536, 2**32 + 1]:
        encoded = encode_varint(value)
        decoded, offset = decode_varint(encoded)
        assert decoded == value
        assert offset == len(encoded)


@pytest.mark.parametrize("data", [b"", b"\xfd\x01", b"\xfe\x01\x02\x03", b"\xff" + b"\x00" * 7])
def test_varint_truncated(data):
    with pytest.raises(SerializationError):
        decode_varint(data)


def test_double_sha256():
    assert double_sha256(b"") == hashlib.sha256(hashlib.sha256(b"").digest()).digest()
    assert double_sha256(b"").hex().startswith("5df6e0e2")
