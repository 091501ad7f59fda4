"""Shared fixtures: an in-memory provider and raw transaction builders."""

import hashlib
import struct
from typing import Any, Dict, List, Optional, Tuple

import pytest

from btc_recovery.providers.base import BaseProvider


class FakeProvider(BaseProvider[Any]):
    """Provider that answers from a dict of canned responses."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("https://explorer.test/blockchain")
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, str, Any]] = []
        self._connected = False

    def _answer(self, key: str) -> Any:
        response = self.responses[key]
        if isinstance(response, Exception):
            raise response
        return response

    async def request(self, method, params=None, raw_response=False, **kwargs):
        self.calls.append(("GET", method, params))
        return self._answer(method)

    async def post(self, method, data, **kwargs):
        self.calls.append(("POST", method, data))
        return self._answer(method)

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected


def varint(n: int) -> bytes:
    if n < 0xfd:
        return bytes([n])
    return b"\xfd" + struct.pack("<H", n)


def build_tx(
    version: int = 1,
    inputs: Optional[List[Tuple[bytes, int, bytes, int]]] = None,
    outputs: Optional[List[Tuple[int, bytes]]] = None,
    locktime: int = 0,
    witnesses: Optional[List[List[bytes]]] = None,
) -> Tuple[bytes, bytes]:
    """
    Serialize a transaction by hand.

    Returns (full serialization, serialization without witness).
    """
    if inputs is None:
        inputs = [(b"\x11" * 32, 0, b"\x51", 0xFFFFFFFF)]
    if outputs is None:
        outputs = [(50_000, b"\x00\x14" + b"\x22" * 20)]

    body = bytearray(varint(len(inputs)))
    for prev, vout, script, sequence in inputs:
        body += prev + struct.pack("<I", vout) + varint(len(script)) + script
        body += struct.pack("<I", sequence)
    body += varint(len(outputs))
    for value, script in outputs:
        body += struct.pack("<q", value) + varint(len(script)) + script

    head = struct.pack("<i", version)
    tail = struct.pack("<I", locktime)
    stripped = head + bytes(body) + tail

    if witnesses is None:
        return stripped, stripped

    wit = bytearray()
    for stack in witnesses:
        wit += varint(len(stack))
        for item in stack:
            wit += varint(len(item)) + item
    full = head + b"\x00\x01" + bytes(body) + bytes(wit) + tail
    return full, stripped


def txid_of(stripped: bytes) -> str:
    return hashlib.sha256(hashlib.sha256(stripped).digest()).digest()[::-1].hex()


@pytest.fixture
def legacy_tx():
    raw, stripped = build_tx()
    return raw, txid_of(stripped)


@pytest.fixture
def segwit_tx():
    raw, stripped = build_tx(
        version=2,
        inputs=[(b"\x33" * 32, 1, b"", 0xFFFFFFFD)],
        witnesses=[[b"\x30" * 71, b"\x02" * 33]],
        locktime=700_000,
    )
    return raw, txid_of(stripped)


@pytest.fixture
def fake_provider():
    return FakeProvider()
