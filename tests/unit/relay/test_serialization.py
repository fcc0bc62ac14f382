import orjson
import pytest

from relay.derivation.receipt_deriver import derive_receipts
from relay.derivation.signer import TransactionSigner
from relay.exceptions import SerializationError
from relay.models.message import EthTransactionRecord
from relay.serialization import decode_message, decode_receipts, encode_message, encode_receipts
from relay_factories import make_receipt


@pytest.fixture
def derived_receipts(two_transaction_block, two_raw_receipts):
    return derive_receipts(
        two_transaction_block, two_transaction_block.transactions, two_raw_receipts, TransactionSigner(chain_id=1)
    )


@pytest.fixture
def records(two_transaction_block, derived_receipts):
    return [
        EthTransactionRecord(receipt=receipt, calldata=tx.input, value=tx.value, contract=tx.to_address)
        for receipt, tx in zip(derived_receipts, two_transaction_block.transactions)
    ]


def test_encode_receipts_is_a_json_array(derived_receipts):
    payload = orjson.loads(encode_receipts(derived_receipts))

    assert isinstance(payload, list)
    assert [r["gas_used"] for r in payload] == [21000, 29000]
    assert [log["log_index"] for r in payload for log in r["logs"]] == [0, 1, 2]


def test_receipts_round_trip(derived_receipts):
    assert decode_receipts(encode_receipts(derived_receipts)) == derived_receipts


def test_message_round_trip(two_transaction_block, records):
    message = decode_message(encode_message(records, two_transaction_block))

    assert message.block == two_transaction_block
    assert message.transactions == records


def test_large_values_are_encoded_as_strings(two_transaction_block, records):
    payload = orjson.loads(encode_message(records, two_transaction_block))

    assert payload["transactions"][0]["value"] == str(10**30)
    assert payload["block"]["transactions"][0]["value"] == str(10**30)


def test_none_fields_are_omitted(two_transaction_block, records):
    payload = orjson.loads(encode_message(records, two_transaction_block))

    assert "contract" not in payload["transactions"][1]
    assert "contract_code" not in payload["transactions"][0]


def test_underived_receipt_is_rejected():
    with pytest.raises(SerializationError, match="missing required fields"):
        encode_receipts([make_receipt(21000)])


def test_message_without_block_is_rejected(derived_receipts):
    payload = orjson.dumps({"transactions": []})

    with pytest.raises(SerializationError):
        decode_message(payload)


def test_invalid_json_is_rejected():
    with pytest.raises(SerializationError):
        decode_receipts(b"not json")
