import asyncio
from typing import Optional

from relay.block_source import RpcBlockSource
from relay.exceptions import RelayError
from relay.pipeline import BlockReceiptPipeline
from utils.logger_utils import get_logger

logger = get_logger("Block Relay")


class BlockRelay(object):
    def __init__(
        self,
        block_source: RpcBlockSource,
        pipeline: BlockReceiptPipeline,
        start_block: Optional[int] = None,
        end_block: Optional[int] = None,
        lag: int = 0,
        period_seconds: int = 10,
        stop_on_error: bool = False,
    ):
        """
        Feeds blocks to the pipeline one at a time, in order.

        Args:
            block_source: Where blocks are read from.
            pipeline: Processes and publishes each block.
            start_block: First block to relay. Defaults to the chain head at startup.
            end_block: Last block to relay. If None, follows the chain head indefinitely.
            lag: How many blocks to trail the chain head.
            period_seconds: Sleep between polls when caught up with the head.
            stop_on_error: Raise the first failed block's error instead of logging it
                and moving on. The cursor is kept in memory only.
        """
        self.block_source = block_source
        self.pipeline = pipeline
        self.start_block = start_block
        self.end_block = end_block
        self.lag = lag
        self.period_seconds = period_seconds
        self.stop_on_error = stop_on_error

        self.next_block: Optional[int] = start_block
        self.failed_blocks = 0

    async def run(self) -> None:
        try:
            if self.next_block is None:
                self.next_block = max(await self.block_source.get_latest_block_number() - self.lag, 0)
                logger.info(f"No start block given, starting at {self.next_block}")

            while self.end_block is None or self.next_block <= self.end_block:
                target_block = await self._target_block()
                if self.next_block > target_block:
                    logger.info(f"Caught up at block {target_block}. Sleeping for {self.period_seconds} seconds...")
                    await asyncio.sleep(self.period_seconds)
                    continue

                while self.next_block <= target_block:
                    await self._relay_block(self.next_block)
                    self.next_block += 1
        finally:
            await self.pipeline.close()

    async def _target_block(self) -> int:
        target_block = await self.block_source.get_latest_block_number() - self.lag
        if self.end_block is not None:
            target_block = min(target_block, self.end_block)
        return target_block

    async def _relay_block(self, block_number: int) -> None:
        try:
            block = await self.block_source.get_block(block_number)
            if block is None:
                raise RelayError(f"Block {block_number} not found", stage="reading_block")
            await self.pipeline.process(block)
        except RelayError:
            self.failed_blocks += 1
            if self.stop_on_error:
                raise
            logger.exception(f"Skipping block {block_number}")
