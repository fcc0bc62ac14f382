from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from relay.models.transaction import EthTransaction


class EthBlockHeader(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    parent_hash: str | None = None
    state_root: str | None = None
    transactions_root: str | None = None
    receipts_root: str | None = None
    miner: str | None = None
    timestamp: int | None = None
    gas_limit: int | None = None
    gas_used: int | None = None
    base_fee_per_gas: int | None = None
    extra_data: str | None = None


class EthBlock(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: str = "block"
    hash: str
    number: int = Field(description="Block number, must be >= 0")
    header: EthBlockHeader = Field(default_factory=EthBlockHeader)
    transactions: List[EthTransaction] = Field(default_factory=list)

    @field_validator("number")
    @classmethod
    def validate_block_number(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"Block number must be greater than or equal to 0, got {v}")
        return v


class StateId(BaseModel):
    """Identifies the state trie a block header commits to."""

    model_config = ConfigDict(frozen=True)

    block_hash: str
    block_number: int
    state_root: str | None = None

    @classmethod
    def from_block(cls, block: EthBlock) -> "StateId":
        return cls(block_hash=block.hash, block_number=block.number, state_root=block.header.state_root)
