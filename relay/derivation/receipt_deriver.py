from typing import List, Sequence

from relay.derivation.contract_address import ZERO_ADDRESS, compute_contract_address
from relay.derivation.signer import TransactionSigner
from relay.exceptions import CountMismatchError, DerivationError, SenderRecoveryError
from relay.models.block import EthBlock
from relay.models.receipt import EthReceipt
from relay.models.transaction import EthTransaction
from utils.logger_utils import get_logger

logger = get_logger("Receipt Deriver")


def derive_receipts(
    block: EthBlock,
    transactions: Sequence[EthTransaction],
    raw_receipts: Sequence[EthReceipt],
    signer: TransactionSigner,
    strict_sender_recovery: bool = False,
) -> List[EthReceipt]:
    """
    Fills in the receipt fields that are implied by the block and its transactions
    rather than stored with the receipt: transaction type and hash, block location,
    contract address, per-transaction gas used and the log location fields.

    Both sequences must be ordered by transaction index. The raw receipts are not
    modified; the derived receipts are independent copies.

    Raises:
        CountMismatchError: the number of receipts differs from the number of transactions.
        DerivationError: a cumulative gas value is missing or decreases.
        SenderRecoveryError: a creation transaction's sender cannot be recovered
            and ``strict_sender_recovery`` is set.
    """
    if len(transactions) != len(raw_receipts):
        raise CountMismatchError(len(transactions), len(raw_receipts))

    derived = []
    log_index = 0
    previous_cumulative_gas_used = 0

    for i, (transaction, raw_receipt) in enumerate(zip(transactions, raw_receipts)):
        receipt = raw_receipt.model_copy(deep=True)

        receipt.transaction_type = transaction.transaction_type
        receipt.transaction_hash = transaction.hash

        receipt.block_hash = block.hash
        receipt.block_number = block.number
        receipt.transaction_index = i

        receipt.contract_address = _resolve_contract_address(transaction, signer, strict_sender_recovery)

        cumulative_gas_used = receipt.cumulative_gas_used
        if cumulative_gas_used is None:
            raise DerivationError(f"Receipt {i} of block {block.number} has no cumulative gas used")
        if cumulative_gas_used < previous_cumulative_gas_used:
            raise DerivationError(
                f"Cumulative gas used decreases at receipt {i} of block {block.number}: "
                f"{previous_cumulative_gas_used} -> {cumulative_gas_used}"
            )
        receipt.gas_used = cumulative_gas_used - previous_cumulative_gas_used
        previous_cumulative_gas_used = cumulative_gas_used

        for log in receipt.logs:
            log.block_number = block.number
            log.block_hash = block.hash
            log.transaction_hash = receipt.transaction_hash
            log.transaction_index = i
            log.log_index = log_index
            log_index += 1

        derived.append(receipt)

    logger.debug(f"Derived {len(derived)} receipts and {log_index} logs for block {block.number}")
    return derived


def _resolve_contract_address(
    transaction: EthTransaction, signer: TransactionSigner, strict_sender_recovery: bool
) -> str:
    if not transaction.is_contract_creation:
        return transaction.to_address

    # Sender recovery is expensive, only creations need it
    try:
        sender = signer.sender(transaction)
    except SenderRecoveryError as e:
        if strict_sender_recovery:
            raise
        logger.warning(f"{e}. Deriving contract address from the zero address.")
        sender = ZERO_ADDRESS

    return compute_contract_address(sender, transaction.nonce)
