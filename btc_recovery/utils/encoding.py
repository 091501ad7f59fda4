"""Encoding and decoding utilities for the Bitcoin recovery client."""

import hashlib
import struct
from typing import Tuple, Union

from ..exceptions import SerializationError, ValidationError
from ..types.common import HexStr

__all__ = [
    "hex_to_bytes",
    "encode_varint",
    "decode_varint",
    "double_sha256",
]


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValidationError: If hex string is invalid
    """
    if not isinstance(hex_str, str):
        raise ValidationError(f"Expected hex string, got {type(hex_str).__name__}")
    try:
        # Remove 0x prefix if present
        if hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        # bytes.fromhex tolerates whitespace, raw transactions must not
        if any(c.isspace() for c in hex_str):
            raise ValueError("whitespace")
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str[:64]}") from e


def encode_varint(n: int) -> bytes:
    """
    Encode integer as Bitcoin variable length integer.

    Args:
        n: Integer to encode

    Returns:
        Encoded varint bytes
    """
    if n < 0xfd:
        return bytes([n])
    elif n <= 0xffff:
        return b"\xfd" + struct.pack("<H", n)
    elif n <= 0xffffffff:
        return b"\xfe" + struct.pack("<I", n)
    else:
        return b"\xff" + struct.pack("<Q", n)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode Bitcoin variable length integer.

    Args:
        data: Bytes containing varint
        offset: Starting position

    Returns:
        Tuple of (value, new_offset)

    Raises:
        SerializationError: If data ends before the varint does
    """
    if offset >= len(data):
        raise SerializationError("Unexpected end of data reading varint")

    prefix = data[offset]
    if prefix < 0xfd:
        return prefix, offset + 1

    fmt, size = {0xfd: ("<H", 2), 0xfe: ("<I", 4), 0xff: ("<Q", 8)}[prefix]
    if offset + 1 + size > len(data):
        raise SerializationError("Unexpected end of data reading varint")
    return struct.unpack_from(fmt, data, offset + 1)[0], offset + 1 + size


def double_sha256(data: bytes) -> bytes:
    """Perform double SHA256 hash."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()
