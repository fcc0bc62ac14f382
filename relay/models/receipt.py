from typing import List

from pydantic import BaseModel, ConfigDict, Field

from relay.models.receipt_log import EthReceiptLog


class EthReceipt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "receipt"
    transaction_type: int | None = None
    status: int | None = None
    root: str | None = None
    cumulative_gas_used: int | None = None
    logs_bloom: str | None = None
    logs: List[EthReceiptLog] = Field(default_factory=list)
    effective_gas_price: int | None = None
    blob_gas_used: int | None = None
    blob_gas_price: int | None = None

    # Derived per block
    transaction_hash: str | None = None
    contract_address: str | None = None
    gas_used: int | None = None
    block_hash: str | None = None
    block_number: int | None = None
    transaction_index: int | None = None
