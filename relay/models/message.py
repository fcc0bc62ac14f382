from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from relay.models.block import EthBlock
from relay.models.receipt import EthReceipt


class EthTransactionRecord(BaseModel):
    """One enriched record per transaction of a block."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = "transaction_record"
    receipt: EthReceipt
    calldata: str = "0x"
    value: int = 0
    contract: str | None = None
    contract_code: str | None = None

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: int) -> str:
        return str(value)


class ParsedMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transactions: List[EthTransactionRecord] = Field(...)
    block: EthBlock = Field(...)
