import hashlib

import pytest

from btc_recovery.exceptions import SerializationError
from btc_recovery.formats import BitcoinTransactionFormat

from conftest import build_tx, txid_of

fmt = BitcoinTransactionFormat()


def test_legacy_txid(legacy_tx):
    raw, expected = legacy_tx
    assert fmt.compute_txid(raw) == expected


def test_legacy_deserialize_fields(legacy_tx):
    raw, _ = legacy_tx
    tx = fmt.deserialize(raw)
    assert tx.version == 1
    assert tx.locktime == 0
    assert tx.has_witness is False
    assert len(tx.inputs) == 1
    assert tx.inputs[0].outpoint.txid == "11" * 32
    assert tx.inputs[0].script_sig == b"\x51"
    assert tx.inputs[0].is_final
    assert tx.total_output_value == 50_000
    assert tx.stripped == raw


def test_segwit_txid_ignores_witness(segwit_tx):
    raw, expected = segwit_tx
    tx = fmt.deserialize(raw)
    assert tx.has_witness is True
    assert tx.inputs[0].witness == (b"\x30" * 71, b"\x02" * 33)
    assert tx.locktime == 700_000
    assert fmt.compute_txid(raw) == expected


def test_segwit_wtxid_covers_witness(segwit_tx):
    raw, txid = segwit_tx
    wtxid = hashlib.sha256(hashlib.sha256(raw).digest()).digest()[::-1].hex()
    assert fmt.compute_wtxid(raw) == wtxid
    assert wtxid != txid


def test_witness_change_keeps_txid():
    a, stripped = build_tx(witnesses=[[b"\x01"]])
    b, _ = build_tx(witnesses=[[b"\x02"]])
    assert fmt.compute_txid(a) == fmt.compute_txid(b) == txid_of(stripped)


def test_multiple_inputs_and_outputs():
    raw, stripped = build_tx(
        inputs=[(bytes([i]) * 32, i, b"\x00" * 107, 0xFFFFFFFE) for i in range(3)],
        outputs=[(1000 * (i + 1), b"\x76\xa9\x14" + b"\x44" * 20 + b"\x88\xac") for i in range(4)],
    )
    tx = fmt.deserialize(raw)
    assert [inp.outpoint.vout for inp in tx.inputs] == [0, 1, 2]
    assert [out.value for out in tx.outputs] == [1000, 2000, 3000, 4000]
    assert fmt.compute_txid(raw) == txid_of(stripped)


@pytest.mark.parametrize("cut", [1, 4, 10, 30])
def test_truncated_rejected(legacy_tx, cut):
    raw, _ = legacy_tx
    with pytest.raises(SerializationError):
        fmt.deserialize(raw[:-cut])


def test_trailing_bytes_rejected(legacy_tx):
    raw, _ = legacy_tx
    with pytest.raises(SerializationError):
        fmt.compute_txid(raw + b"\x00")


def test_zero_inputs_without_flag_is_legacy():
    script = b"\x51"
    output = (1000).to_bytes(8, "little") + bytes([len(script)]) + script
    raw = bytes.fromhex("02000000") + b"\x00" + b"\x02" + output * 2 + bytes(4)

    tx = fmt.deserialize(raw)

    assert tx.has_witness is False
    assert tx.inputs == []
    assert tx.total_output_value == 2000
    assert fmt.compute_txid(raw) == txid_of(raw)


def test_segwit_marker_without_inputs_rejected():
    raw = bytes.fromhex("02000000") + b"\x00\x01" + b"\x00" + b"\x00" + bytes(4)
    with pytest.raises(SerializationError):
        fmt.deserialize(raw)


def test_empty_witness_with_flag_rejected():
    raw, _ = build_tx(witnesses=[[]])
    with pytest.raises(SerializationError):
        fmt.deserialize(raw)


def test_oversized_count_rejected():
    raw = bytes.fromhex("01000000") + b"\xfd\xff\xff" + b"\x00" * 10
    with pytest.raises(SerializationError):
        fmt.deserialize(raw)


def test_empty_input_rejected():
    with pytest.raises(SerializationError):
        fmt.deserialize(b"")
