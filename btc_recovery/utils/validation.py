"""Validation utilities for the Bitcoin recovery client.

Covers caller input (addresses and raw transaction hex) and the
boundary checks applied to explorer payloads before they become
domain records.
"""

import re
from typing import Any, List, Mapping

from ..exceptions import ResponseShapeError, ValidationError
from ..types.common import HexStr

__all__ = [
    "is_valid_address",
    "validate_address",
    "is_valid_transaction_hex",
    "validate_transaction_hex",
    "is_strict_int",
    "require_mapping",
    "require_int",
    "require_str",
    "require_list",
]

# Regex patterns
HEX_PATTERN = re.compile(r"^(?:[0-9a-fA-F]{2})+$")
ADDRESS_PATTERN = re.compile(r"^[0-9A-Za-z]{14,90}$")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def is_valid_address(address: str) -> bool:
    """
    Check if address is safe to embed in an explorer path.

    Only the character set and length are checked; the explorer is the
    authority on whether the address exists.

    Args:
        address: Address to validate

    Returns:
        True if valid, False otherwise
    """
    return isinstance(address, str) and bool(ADDRESS_PATTERN.match(address))


def validate_address(address: str) -> str:
    """
    Validate Bitcoin address and return normalized form.

    Args:
        address: Address to validate

    Returns:
        Normalized address

    Raises:
        ValidationError: If address is invalid
    """
    if not address:
        raise ValidationError("Address cannot be empty")

    # Normalize Bech32 to lowercase
    if address.lower().startswith(("bc1", "tb1")):
        address = address.lower()

    if not is_valid_address(address):
        raise ValidationError(f"Invalid Bitcoin address: {address}")

    return address


def is_valid_transaction_hex(transaction_hex: str) -> bool:
    """Check if string is non-empty, even-length hex."""
    return isinstance(transaction_hex, str) and bool(HEX_PATTERN.match(transaction_hex))


def validate_transaction_hex(transaction_hex: str) -> HexStr:
    """
    Validate raw transaction hex.

    Args:
        transaction_hex: Raw transaction as hex

    Returns:
        The same hex string

    Raises:
        ValidationError: If not non-empty, even-length hex
    """
    if not transaction_hex:
        raise ValidationError("Transaction hex cannot be empty")

    if not is_valid_transaction_hex(transaction_hex):
        raise ValidationError("Transaction hex must be even-length hexadecimal")

    return HexStr(transaction_hex)


def is_strict_int(value: Any) -> bool:
    """Check for a JSON integer (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool)


def require_mapping(payload: Any, name: str) -> Mapping[str, Any]:
    """
    Require a JSON object.

    Raises:
        ResponseShapeError: If payload is not an object
    """
    if not isinstance(payload, Mapping):
        raise ResponseShapeError(
            f"Expected object for '{name}', got {type(payload).__name__}"
        )
    return payload


def require_int(
    payload: Mapping[str, Any],
    key: str,
    name: str,
    minimum: int = INT64_MIN,
    maximum: int = INT64_MAX,
) -> int:
    """
    Require an integer field within bounds.

    Args:
        payload: Object holding the field
        key: Field name
        name: Dotted path used in error messages
        minimum: Smallest accepted value
        maximum: Largest accepted value

    Raises:
        ResponseShapeError: If the field is missing, not an integer or
            out of range
    """
    value = payload.get(key)
    if not is_strict_int(value):
        raise ResponseShapeError(f"Expected integer at '{name}.{key}', got {value!r}")
    if not minimum <= value <= maximum:
        raise ResponseShapeError(f"Integer at '{name}.{key}' out of range: {value}")
    return value


def require_str(payload: Mapping[str, Any], key: str, name: str) -> str:
    """
    Require a non-empty string field.

    Raises:
        ResponseShapeError: If the field is missing or not a string
    """
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise ResponseShapeError(f"Expected string at '{name}.{key}', got {value!r}")
    return value


def require_list(payload: Mapping[str, Any], key: str, name: str) -> List[Any]:
    """
    Require a list field.

    Raises:
        ResponseShapeError: If the field is missing or not a list
    """
    value = payload.get(key)
    if not isinstance(value, list):
        raise ResponseShapeError(f"Expected list at '{name}.{key}', got {type(value).__name__}")
    return value
