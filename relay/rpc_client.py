import asyncio
import random
import ssl
import time
from typing import Any, Dict, List, Optional, Union

import aiohttp

from utils.logger_utils import get_logger

logger = get_logger("Rpc Client")


class RpcRequestError(Exception):
    pass


class RpcClient(object):
    """
    JSON-RPC client with provider failover.
    Uses a persistent ClientSession for connection pooling and backs off on HTTP 429.
    """

    def __init__(
        self,
        rpc_url: Union[str, List[str]],
        max_retries: int = 3,
        timeout: int = 60,
        rpc_min_interval: float = 0.0,
        verify_ssl: bool = True,
    ):
        if isinstance(rpc_url, str):
            self.rpc_urls = [url.strip() for url in rpc_url.split(",") if url.strip()]
        else:
            self.rpc_urls = list(rpc_url)

        if not self.rpc_urls:
            raise ValueError("At least one RPC URL must be provided.")

        self.id_counter = 0
        self.max_retries = max_retries
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.verify_ssl = verify_ssl

        self._session: Optional[aiohttp.ClientSession] = None

        self._last_request_time = 0.0
        self._min_interval = rpc_min_interval

    async def _get_session(self) -> aiohttp.ClientSession:
        """Lazy loads or returns the existing session."""
        if self._session is None or self._session.closed:
            ssl_context = ssl.create_default_context()
            if not self.verify_ssl:
                ssl_context.check_hostname = False
                ssl_context.verify_mode = ssl.CERT_NONE
            connector = aiohttp.TCPConnector(limit=100, ssl=ssl_context)
            self._session = aiohttp.ClientSession(connector=connector, timeout=self.timeout)
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    def _generate_id(self) -> int:
        self.id_counter += 1
        return self.id_counter

    async def _enforce_rate_limit(self):
        """Ensures a minimum interval between requests to avoid bursting."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_interval:
            await asyncio.sleep(self._min_interval - elapsed)
        self._last_request_time = time.time()

    @staticmethod
    async def _backoff(attempt: int):
        # 1s, 2s, 4s... + jitter
        await asyncio.sleep((2 ** (attempt - 1)) + random.uniform(0, 1))

    async def get_latest_block_number(self) -> int:
        return int(await self.request("eth_blockNumber", []), 16)

    async def get_block_by_number(self, block_number: int, full_transactions: bool = True) -> Optional[Dict[str, Any]]:
        return await self.request("eth_getBlockByNumber", [hex(block_number), full_transactions])

    async def get_block_receipts(self, block_hash: str) -> Optional[List[Dict[str, Any]]]:
        return await self.request("eth_getBlockReceipts", [block_hash])

    async def get_raw_transaction(self, transaction_hash: str) -> Optional[str]:
        return await self.request("eth_getRawTransactionByHash", [transaction_hash])

    async def get_code(self, address: str, block: Union[str, Dict[str, str]] = "latest") -> Optional[str]:
        return await self.request("eth_getCode", [address, block])

    async def request(self, method: str, params: List[Any]) -> Any:
        """
        Sends one JSON-RPC call, trying every provider on each attempt.

        Returns the ``result`` member, which may be None. Raises RpcRequestError when
        a provider answers with a JSON-RPC error or all attempts fail.
        """
        payload = {"jsonrpc": "2.0", "method": method, "params": params, "id": self._generate_id()}
        session = await self._get_session()
        last_error = None

        for attempt in range(1, self.max_retries + 1):
            for url in self.rpc_urls:
                try:
                    await self._enforce_rate_limit()
                    async with session.post(url, json=payload) as response:
                        if response.status == 200:
                            data = await response.json()
                            if "error" in data:
                                raise RpcRequestError(f"{method} failed at {url}: {data['error']}")
                            return data.get("result")
                        elif response.status == 429:
                            logger.warning(f"RPC 429 at {url} for {method}.")
                            last_error = f"HTTP 429 at {url}"
                        else:
                            logger.error(f"RPC HTTP Error {response.status} ({method}) at {url}.")
                            last_error = f"HTTP {response.status} at {url}"
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.warning(f"Network error in {method} at {url}: {e}")
                    last_error = str(e)

            if attempt < self.max_retries:
                logger.warning(f"All providers failed for {method} (Attempt {attempt}/{self.max_retries}). Retrying...")
                await self._backoff(attempt)

        raise RpcRequestError(f"{method} failed on all providers after {self.max_retries} attempts: {last_error}")
