from pydantic import BaseModel, ConfigDict, Field, field_serializer


class EthTransaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: str = "transaction"
    hash: str | None = None
    nonce: int = 0
    to_address: str | None = None
    input: str = "0x"
    value: int = Field(default=0, ge=0)
    transaction_type: int = 0
    chain_id: int | None = None
    # Signed RLP / typed-envelope encoding, needed to recover the sender
    raw: str | None = None

    @property
    def is_contract_creation(self) -> bool:
        return self.to_address is None

    @field_serializer("value", when_used="json")
    def serialize_value(self, value: int) -> str:
        # Values can exceed 64 bits
        return str(value)
