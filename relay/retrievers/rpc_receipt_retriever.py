from typing import List, Optional

from relay.exceptions import RetrievalError
from relay.mappers.receipt_mapper import EthReceiptMapper
from relay.models.block import EthBlockHeader, StateId
from relay.models.receipt import EthReceipt
from relay.retrievers.base import ReceiptRetriever
from relay.rpc_client import RpcClient, RpcRequestError
from utils.logger_utils import get_logger

logger = get_logger("Rpc Receipt Retriever")


class RpcReceiptRetriever(ReceiptRetriever):
    """
    Retrieves receipts and contract code from a JSON-RPC node.

    Untrusted retrievals are checked to belong to the requested block; the node is
    otherwise trusted, no receipt trie proof is verified.
    """

    def __init__(self, rpc_client: RpcClient, receipt_mapper: Optional[EthReceiptMapper] = None):
        self._rpc_client = rpc_client
        self.receipt_mapper = receipt_mapper or EthReceiptMapper()

    async def retrieve_receipts(
        self,
        block_hash: str,
        block_number: int,
        header: EthBlockHeader,
        untrusted: bool = True,
    ) -> List[EthReceipt]:
        try:
            response = await self._rpc_client.get_block_receipts(block_hash)
        except RpcRequestError as e:
            raise RetrievalError(f"Failed to retrieve receipts for block {block_number} ({block_hash}): {e}") from e

        if response is None:
            raise RetrievalError(f"Node has no receipts for block {block_number} ({block_hash})")

        receipts = [self.receipt_mapper.json_dict_to_receipt(r) for r in response]

        if untrusted:
            for index, receipt in enumerate(receipts):
                if receipt.block_hash is not None and receipt.block_hash.lower() != block_hash.lower():
                    raise RetrievalError(
                        f"Receipt {index} belongs to block {receipt.block_hash}, requested {block_hash}"
                    )

        logger.debug(f"Retrieved {len(receipts)} receipts for block {block_number}")
        return receipts

    async def retrieve_code(self, state_id: StateId, address: str) -> Optional[str]:
        try:
            code = await self._rpc_client.get_code(address, {"blockHash": state_id.block_hash})
        except RpcRequestError as e:
            raise RetrievalError(f"Failed to retrieve code of {address} at block {state_id.block_number}: {e}") from e

        # Accounts without code return "0x"
        if not code or code == "0x":
            return None
        return code

    async def close(self) -> None:
        await self._rpc_client.close()
