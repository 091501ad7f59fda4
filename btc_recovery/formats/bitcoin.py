"""Bitcoin transaction format (legacy and BIP144 segwit serialization)."""

import logging
import struct
from typing import List, Tuple

from ..exceptions import SerializationError
from ..formats.base import TransactionFormat
from ..types.common import Satoshi, TxId
from ..types.transaction import (
    OutPoint,
    ParsedTransaction,
    TransactionInput,
    TransactionOutput,
)
from ..utils.encoding import decode_varint, double_sha256, encode_varint

__all__ = ["BitcoinTransactionFormat"]

logger = logging.getLogger(__name__)

SEGWIT_MARKER = 0x00
SEGWIT_FLAG = 0x01


class _Reader:
    """Bounds-checked cursor over transaction bytes."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def read(self, size: int) -> bytes:
        end = self.offset + size
        if size < 0 or end > len(self.data):
            raise SerializationError(
                f"Unexpected end of transaction at offset {self.offset} "
                f"(wanted {size} bytes, have {len(self.data) - self.offset})"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def unpack(self, fmt: str) -> int:
        return struct.unpack(fmt, self.read(struct.calcsize(fmt)))[0]

    def varint(self) -> int:
        value, self.offset = decode_varint(self.data, self.offset)
        return value

    def var_bytes(self) -> bytes:
        return self.read(self.varint())

    def peek(self, size: int) -> bytes:
        return self.data[self.offset:self.offset + size]

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset


class BitcoinTransactionFormat(TransactionFormat):
    """
    Bitcoin wire format for transactions.

    The txid is double-SHA256 over the serialization without the segwit
    marker, flag and witness stacks, shown byte-reversed. Any structurally
    invalid input (truncation or trailing bytes) is rejected.
    """

    name = "bitcoin"

    def deserialize(self, raw: bytes) -> ParsedTransaction:
        reader = _Reader(raw)

        version = reader.unpack("<i")

        has_witness = False
        # A zero input count followed by anything but the flag is legacy
        if reader.peek(2) == bytes([SEGWIT_MARKER, SEGWIT_FLAG]):
            reader.read(2)
            has_witness = True

        inputs = self._read_inputs(reader)
        if has_witness and not inputs:
            raise SerializationError("Segwit transaction has no inputs")

        outputs = self._read_outputs(reader)

        if has_witness:
            stacks = [self._read_witness(reader) for _ in inputs]
            if not any(stacks):
                raise SerializationError("Segwit flag set but all witnesses are empty")
            inputs = [
                TransactionInput(
                    outpoint=inp.outpoint,
                    script_sig=inp.script_sig,
                    sequence=inp.sequence,
                    witness=stack,
                )
                for inp, stack in zip(inputs, stacks)
            ]

        locktime = reader.unpack("<I")

        if reader.remaining:
            raise SerializationError(
                f"Trailing data after transaction: {reader.remaining} bytes"
            )

        return ParsedTransaction(
            version=version,
            inputs=inputs,
            outputs=outputs,
            locktime=locktime,
            has_witness=has_witness,
            stripped=self.serialize_stripped(version, inputs, outputs, locktime),
        )

    def compute_txid(self, raw: bytes) -> TxId:
        parsed = self.deserialize(raw)
        txid = TxId(double_sha256(parsed.stripped)[::-1].hex())
        logger.debug(
            f"Computed txid {txid} ({len(parsed.inputs)} in, {len(parsed.outputs)} out, "
            f"witness={parsed.has_witness})"
        )
        return txid

    def compute_wtxid(self, raw: bytes) -> TxId:
        """Compute the witness transaction id (hash of the full serialization)."""
        # Parse first so malformed bytes are rejected the same way as for txid
        self.deserialize(raw)
        return TxId(double_sha256(raw)[::-1].hex())

    @staticmethod
    def serialize_stripped(
        version: int,
        inputs: List[TransactionInput],
        outputs: List[TransactionOutput],
        locktime: int,
    ) -> bytes:
        """Serialize without witness data."""
        s = bytearray()
        s.extend(struct.pack("<i", version))

        s.extend(encode_varint(len(inputs)))
        for inp in inputs:
            s.extend(inp.outpoint.bytes)
            s.extend(encode_varint(len(inp.script_sig)))
            s.extend(inp.script_sig)
            s.extend(struct.pack("<I", inp.sequence))

        s.extend(encode_varint(len(outputs)))
        for out in outputs:
            s.extend(struct.pack("<q", out.value))
            s.extend(encode_varint(len(out.script_pubkey)))
            s.extend(out.script_pubkey)

        s.extend(struct.pack("<I", locktime))
        return bytes(s)

    def _read_inputs(self, reader: _Reader) -> List[TransactionInput]:
        count = reader.varint()
        self._check_count(reader, count, 41, "inputs")

        inputs = []
        for _ in range(count):
            prev_txid = reader.read(32)[::-1].hex()
            vout = reader.unpack("<I")
            script_sig = reader.var_bytes()
            sequence = reader.unpack("<I")
            inputs.append(TransactionInput(
                outpoint=OutPoint(txid=TxId(prev_txid), vout=vout),
                script_sig=script_sig,
                sequence=sequence,
            ))
        return inputs

    def _read_outputs(self, reader: _Reader) -> List[TransactionOutput]:
        count = reader.varint()
        self._check_count(reader, count, 9, "outputs")

        outputs = []
        for _ in range(count):
            value = reader.unpack("<q")
            if value < 0:
                raise SerializationError(f"Negative output value: {value}")
            outputs.append(TransactionOutput(
                value=Satoshi(value),
                script_pubkey=reader.var_bytes(),
            ))
        return outputs

    def _read_witness(self, reader: _Reader) -> Tuple[bytes, ...]:
        count = reader.varint()
        self._check_count(reader, count, 1, "witness items")
        return tuple(reader.var_bytes() for _ in range(count))

    @staticmethod
    def _check_count(reader: _Reader, count: int, min_size: int, what: str) -> None:
        # Reject counts that cannot fit in the remaining bytes before looping
        if count * min_size > reader.remaining:
            raise SerializationError(
                f"Declared {count} {what} but only {reader.remaining} bytes remain"
            )
