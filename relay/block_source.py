from typing import Optional

from relay.exceptions import RetrievalError
from relay.mappers.block_mapper import EthBlockMapper
from relay.models.block import EthBlock
from relay.rpc_client import RpcClient, RpcRequestError
from utils.logger_utils import get_logger

logger = get_logger("Rpc Block Source")


class RpcBlockSource(object):
    """
    Reads full blocks from a JSON-RPC node.

    ``eth_getBlockByNumber`` does not return signed payloads, so the raw encoding of
    every contract-creation transaction is fetched separately for sender recovery.
    """

    def __init__(self, rpc_client: RpcClient, block_mapper: Optional[EthBlockMapper] = None):
        self._rpc_client = rpc_client
        self.block_mapper = block_mapper or EthBlockMapper()

    async def get_latest_block_number(self) -> int:
        try:
            return await self._rpc_client.get_latest_block_number()
        except RpcRequestError as e:
            raise RetrievalError(f"Failed to read the chain head: {e}") from e

    async def get_block(self, block_number: int) -> Optional[EthBlock]:
        try:
            block_dict = await self._rpc_client.get_block_by_number(block_number, full_transactions=True)
            if block_dict is None:
                return None

            for tx in block_dict.get("transactions") or []:
                if isinstance(tx, dict) and tx.get("to") is None:
                    tx["raw"] = await self._rpc_client.get_raw_transaction(tx["hash"])

            return self.block_mapper.json_dict_to_block(block_dict)
        except RpcRequestError as e:
            raise RetrievalError(f"Failed to read block {block_number}: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise RetrievalError(f"Malformed block {block_number}: {e}") from e
