from enum import Enum
from typing import List, Optional

from relay.derivation.receipt_deriver import derive_receipts
from relay.derivation.signer import make_signer
from relay.exceptions import DerivationError, PublishError, RelayError, RetrievalError, SerializationError
from relay.models.block import EthBlock
from relay.models.message import EthTransactionRecord
from relay.publishers.base import Publisher
from relay.record_assembler import RecordAssembler
from relay.retrievers.base import ReceiptRetriever
from relay.serialization import encode_message, encode_receipts
from utils.logger_utils import get_logger

logger = get_logger("Block Receipt Pipeline")

PAYLOAD_FORMATS = ("receipts", "message")


class PipelineState(str, Enum):
    IDLE = "idle"
    RETRIEVING_RECEIPTS = "retrieving_receipts"
    DERIVING = "deriving"
    ASSEMBLING = "assembling"
    SERIALIZING = "serializing"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


class BlockReceiptPipeline(object):
    """
    Turns one block into one published message.

    For every block with transactions: retrieve the receipts, derive the fields they
    lack, assemble one record per transaction, serialize, publish once. Any error
    aborts the block before anything is published and is raised to the caller with
    the stage it happened in. Nothing is retried here.

    The pipeline owns its retriever and publisher and releases both in ``close``.
    """

    def __init__(
        self,
        retriever: ReceiptRetriever,
        publisher: Publisher,
        assembler: Optional[RecordAssembler] = None,
        chain_id: Optional[int] = None,
        routing_key: str = "eth",
        payload_format: str = "receipts",
        strict_sender_recovery: bool = False,
    ):
        if payload_format not in PAYLOAD_FORMATS:
            raise ValueError(f"Unknown payload format '{payload_format}', expected one of {PAYLOAD_FORMATS}")
        self.retriever = retriever
        self.publisher = publisher
        self.assembler = assembler or RecordAssembler()
        self.chain_id = chain_id
        self.routing_key = routing_key
        self.payload_format = payload_format
        self.strict_sender_recovery = strict_sender_recovery

    async def process(self, block: EthBlock) -> List[EthTransactionRecord]:
        """
        Returns the published records, or an empty list for a block without transactions.

        Raises:
            RelayError: CountMismatchError, DerivationError, RetrievalError,
                SerializationError or PublishError, with ``stage`` set.
        """
        transactions = block.transactions
        if not transactions:
            logger.debug(f"Block {block.number} has no transactions, nothing to publish")
            return []

        state = PipelineState.IDLE
        try:
            state = PipelineState.RETRIEVING_RECEIPTS
            try:
                raw_receipts = await self.retriever.retrieve_receipts(
                    block.hash, block.number, block.header, untrusted=True
                )
            except RelayError:
                raise
            except Exception as e:
                raise RetrievalError(f"Receipt retrieval failed for block {block.number}: {e}") from e

            state = PipelineState.DERIVING
            signer = make_signer(self.chain_id, block.number)
            derived_receipts = derive_receipts(
                block, transactions, raw_receipts, signer, strict_sender_recovery=self.strict_sender_recovery
            )

            state = PipelineState.ASSEMBLING
            records = await self.assembler.assemble(block, derived_receipts, transactions)

            state = PipelineState.SERIALIZING
            if self.payload_format == "message":
                payload = encode_message(records, block)
            else:
                payload = encode_receipts(derived_receipts)

            state = PipelineState.PUBLISHING
            try:
                self.publisher.publish(payload, self.routing_key)
            except RelayError:
                raise
            except Exception as e:
                raise PublishError(f"Publishing block {block.number} failed: {e}") from e

            state = PipelineState.DONE
        except RelayError as e:
            self._fail(block, state, e)
            raise
        except Exception as e:
            error_class = SerializationError if state == PipelineState.SERIALIZING else DerivationError
            error = error_class(f"Unexpected error in block {block.number}: {e!r}")
            self._fail(block, state, error)
            raise error from e

        logger.info(f"Published {len(records)} transaction records of block {block.number} ({len(payload)} bytes)")
        return records

    @staticmethod
    def _fail(block: EthBlock, state: PipelineState, error: RelayError) -> None:
        if error.stage is None:
            error.stage = state.value
        logger.error(f"Block {block.number} {PipelineState.FAILED.value} while {error.stage}: {error}")

    async def close(self) -> None:
        try:
            await self.retriever.close()
        finally:
            self.publisher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.close()
