import asyncio
from typing import Optional

import click

from config.settings import settings
from relay.block_relay import BlockRelay
from relay.block_source import RpcBlockSource
from relay.pipeline import PAYLOAD_FORMATS, BlockReceiptPipeline
from relay.publishers.publisher_creator import create_publisher
from relay.record_assembler import RecordAssembler
from relay.retrievers.rpc_receipt_retriever import RpcReceiptRetriever
from relay.rpc_client import RpcClient
from utils.logger_utils import configure_logging, get_logger
from utils.signal_utils import configure_signals
from utils.validation_utils import validate_block_range

logger = get_logger("Relay Blocks")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-p",
    "--provider-uri",
    default=settings.ethereum.provider_uri,
    show_default=True,
    type=str,
    help="The URI(s) of the JSON-RPC node(s). Multiple URIs can be separated by commas for failover.",
)
@click.option(
    "-o",
    "--output",
    default=settings.kafka.output,
    show_default=True,
    type=str,
    help="Broker connection string, e.g. kafka/127.0.0.1:9092, or 'console' to print payloads.",
)
@click.option("-s", "--start-block", default=None, type=int, help="First block to relay. Defaults to the chain head.")
@click.option("-e", "--end-block", default=None, type=int, help="Last block to relay. Follows the chain head if omitted.")
@click.option("--lag", default=0, show_default=True, type=int, help="The number of blocks to lag behind the chain head.")
@click.option("--chain-id", default=settings.ethereum.chain_id, show_default=True, type=int, help="Chain id used to validate signatures.")
@click.option("--routing-key", default=settings.relay.routing_key, show_default=True, type=str, help="Routing key of published messages.")
@click.option(
    "--payload-format",
    default=settings.relay.payload_format,
    show_default=True,
    type=click.Choice(PAYLOAD_FORMATS),
    help="'receipts' publishes the derived receipt set, 'message' the full transactions/block envelope.",
)
@click.option(
    "--fetch-contract-code/--no-fetch-contract-code",
    default=settings.relay.fetch_contract_code,
    show_default=True,
    help="Attach the code deployed at each transaction's destination.",
)
@click.option(
    "--strict-sender-recovery/--tolerant-sender-recovery",
    default=settings.relay.strict_sender_recovery,
    show_default=True,
    help="Fail a block when the sender of a contract creation cannot be recovered.",
)
@click.option("--stop-on-error", is_flag=True, default=False, help="Stop at the first block that fails.")
@click.option(
    "--period-seconds", default=settings.relay.period_seconds, show_default=True, type=int, help="How many seconds to sleep when caught up"
)
@click.option("--log-file", default=None, type=str, help="Log file")
def relay_blocks(
    provider_uri: str,
    output: str,
    start_block: Optional[int],
    end_block: Optional[int],
    lag: int,
    chain_id: Optional[int],
    routing_key: str,
    payload_format: str,
    fetch_contract_code: bool,
    strict_sender_recovery: bool,
    stop_on_error: bool,
    period_seconds: int,
    log_file: Optional[str] = None,
):
    """Derives receipt fields for each block and publishes them to the broker."""
    configure_logging(log_file, settings.app.log_level)
    configure_signals()

    if start_block is not None:
        try:
            validate_block_range(start_block, end_block)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--start-block/--end-block")

    rpc_client = RpcClient(
        provider_uri,
        max_retries=settings.ethereum.rpc_max_retries,
        timeout=settings.ethereum.rpc_timeout,
        rpc_min_interval=settings.ethereum.rpc_min_interval,
    )
    retriever = RpcReceiptRetriever(rpc_client)
    pipeline = BlockReceiptPipeline(
        retriever=retriever,
        publisher=create_publisher(output),
        assembler=RecordAssembler(
            code_retriever=retriever,
            fetch_contract_code=fetch_contract_code,
            max_concurrent_requests=settings.relay.max_concurrent_code_requests,
        ),
        chain_id=chain_id,
        routing_key=routing_key,
        payload_format=payload_format,
        strict_sender_recovery=strict_sender_recovery,
    )
    block_relay = BlockRelay(
        block_source=RpcBlockSource(rpc_client),
        pipeline=pipeline,
        start_block=start_block,
        end_block=end_block,
        lag=lag,
        period_seconds=period_seconds,
        stop_on_error=stop_on_error,
    )

    logger.info(f"Relaying blocks from {provider_uri} to {output} with routing key '{routing_key}'")
    try:
        asyncio.run(block_relay.run())
    except KeyboardInterrupt:
        logger.info("Relay interrupted by user. Shutting down gracefully...")
