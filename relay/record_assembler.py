from typing import List, Optional, Sequence

from relay.models.block import EthBlock, StateId
from relay.models.message import EthTransactionRecord
from relay.models.receipt import EthReceipt
from relay.models.transaction import EthTransaction
from relay.retrievers.base import ReceiptRetriever
from utils.async_utils import gather_with_concurrency
from utils.logger_utils import get_logger

logger = get_logger("Record Assembler")


class RecordAssembler(object):
    """
    Pairs each derived receipt with its transaction's calldata, value and destination.

    When ``fetch_contract_code`` is set, the code deployed at each destination is looked
    up at the block's state. Lookups are best-effort: a failed or empty lookup leaves
    ``contract_code`` unset.
    """

    def __init__(
        self,
        code_retriever: Optional[ReceiptRetriever] = None,
        fetch_contract_code: bool = False,
        max_concurrent_requests: int = 5,
    ):
        if fetch_contract_code and code_retriever is None:
            raise ValueError("fetch_contract_code requires a code_retriever")
        self.code_retriever = code_retriever
        self.fetch_contract_code = fetch_contract_code
        self.max_concurrent_requests = max_concurrent_requests

    async def assemble(
        self,
        block: EthBlock,
        derived_receipts: Sequence[EthReceipt],
        transactions: Sequence[EthTransaction],
    ) -> List[EthTransactionRecord]:
        records = [
            EthTransactionRecord(
                receipt=receipt,
                calldata=transaction.input,
                value=transaction.value,
                contract=transaction.to_address,
            )
            for receipt, transaction in zip(derived_receipts, transactions)
        ]

        if self.fetch_contract_code:
            await self._attach_contract_code(block, records)

        return records

    async def _attach_contract_code(self, block: EthBlock, records: List[EthTransactionRecord]) -> None:
        state_id = StateId.from_block(block)
        targets = [record for record in records if record.contract is not None]
        if not targets:
            return

        codes = await gather_with_concurrency(
            self.max_concurrent_requests,
            *(self._lookup_code(state_id, record.contract) for record in targets),
        )
        for record, code in zip(targets, codes):
            record.contract_code = code

    async def _lookup_code(self, state_id: StateId, address: str) -> Optional[str]:
        try:
            return await self.code_retriever.retrieve_code(state_id, address)
        except Exception as e:
            logger.warning(f"Contract code unavailable for {address} at block {state_id.block_number}: {e!r}")
            return None
