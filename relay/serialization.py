from typing import Any, Dict, List, Sequence

import orjson
from pydantic import TypeAdapter, ValidationError

from relay.exceptions import SerializationError
from relay.models.block import EthBlock
from relay.models.message import EthTransactionRecord, ParsedMessage
from relay.models.receipt import EthReceipt

# Receipt fields every published payload must carry; null is not allowed either
REQUIRED_RECEIPT_FIELDS = (
    "transaction_hash",
    "block_hash",
    "block_number",
    "transaction_index",
    "cumulative_gas_used",
    "gas_used",
    "contract_address",
    "logs",
)

_receipts_adapter = TypeAdapter(List[EthReceipt])


def _receipt_to_json_dict(receipt: EthReceipt) -> Dict[str, Any]:
    receipt_dict = receipt.model_dump(mode="json", exclude_none=True)
    missing = [field for field in REQUIRED_RECEIPT_FIELDS if field not in receipt_dict]
    if missing:
        raise SerializationError(
            f"Receipt of transaction {receipt.transaction_hash} is missing required fields: {', '.join(missing)}"
        )
    return receipt_dict


def _dumps(value: Any) -> bytes:
    try:
        return orjson.dumps(value)
    except (orjson.JSONEncodeError, TypeError) as e:
        raise SerializationError(f"Payload could not be encoded as JSON: {e}") from e


def encode_receipts(receipts: Sequence[EthReceipt]) -> bytes:
    """Encodes the derived receipt set of a block as a JSON array."""
    return _dumps([_receipt_to_json_dict(receipt) for receipt in receipts])


def encode_message(records: Sequence[EthTransactionRecord], block: EthBlock) -> bytes:
    """Encodes the full ``{transactions, block}`` envelope."""
    transactions = []
    for record in records:
        record_dict = record.model_dump(mode="json", exclude_none=True)
        record_dict["receipt"] = _receipt_to_json_dict(record.receipt)
        transactions.append(record_dict)

    return _dumps({
        "transactions": transactions,
        "block": block.model_dump(mode="json", exclude_none=True),
    })


def decode_receipts(payload: bytes) -> List[EthReceipt]:
    try:
        return _receipts_adapter.validate_python(orjson.loads(payload))
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise SerializationError(f"Payload is not a receipt set: {e}") from e


def decode_message(payload: bytes) -> ParsedMessage:
    try:
        return ParsedMessage.model_validate(orjson.loads(payload))
    except (orjson.JSONDecodeError, ValidationError) as e:
        raise SerializationError(f"Payload is not a parsed message: {e}") from e
