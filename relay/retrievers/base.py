from abc import ABC, abstractmethod
from typing import List, Optional

from relay.models.block import EthBlockHeader, StateId
from relay.models.receipt import EthReceipt


class ReceiptRetriever(ABC):
    """
    Supplies the receipts of a block and, optionally, contract code at a block's state.

    Implementations own their verification policy: ``untrusted=True`` asks the
    retriever to check what it returns before handing it over.
    """

    @abstractmethod
    async def retrieve_receipts(
        self,
        block_hash: str,
        block_number: int,
        header: EthBlockHeader,
        untrusted: bool = True,
    ) -> List[EthReceipt]:
        """Returns the block's receipts ordered by transaction index. Raises RetrievalError."""

    async def retrieve_code(self, state_id: StateId, address: str) -> Optional[str]:
        """Returns the hex bytecode deployed at ``address``, or None when not supported."""
        return None

    async def close(self) -> None:
        pass
