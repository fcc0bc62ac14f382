from typing import Optional

import rlp
from eth_account import Account
from eth_utils import big_endian_to_int, to_bytes

from relay.exceptions import SenderRecoveryError
from relay.models.transaction import EthTransaction
from utils.formatter_utils import to_normalized_address

LEGACY_UNPROTECTED_V = (27, 28)
EIP155_V_OFFSET = 35
# Typed transaction envelopes start with a byte below 0x7f, legacy RLP lists with >= 0xc0
MAX_TYPED_TRANSACTION_PREFIX = 0x7F


class TransactionSigner(object):
    """
    Recovers transaction senders under the signing rules of one chain.

    Legacy transactions signed with v in {27, 28} predate replay protection and are
    accepted on any chain. Protected legacy transactions must carry
    v == 35 + 2 * chain_id or 36 + 2 * chain_id. Typed transactions must embed the
    signer's chain id. A signer without a chain id accepts every transaction.
    """

    def __init__(self, chain_id: Optional[int] = None):
        self.chain_id = chain_id

    def sender(self, transaction: EthTransaction) -> str:
        if not transaction.raw:
            raise SenderRecoveryError(f"Transaction {transaction.hash} carries no signed payload")

        try:
            raw = to_bytes(hexstr=transaction.raw)
        except (ValueError, TypeError) as e:
            raise SenderRecoveryError(f"Transaction {transaction.hash} has a malformed signed payload: {e}") from e

        self._validate_chain_id(transaction, raw)

        try:
            sender = Account.recover_transaction(raw)
        except Exception as e:
            raise SenderRecoveryError(f"Cannot recover sender of transaction {transaction.hash}: {e}") from e
        return to_normalized_address(sender)

    def _validate_chain_id(self, transaction: EthTransaction, raw: bytes) -> None:
        if self.chain_id is None or not raw:
            return

        try:
            if raw[0] <= MAX_TYPED_TRANSACTION_PREFIX:
                fields = rlp.decode(raw[1:])
                embedded_chain_id = big_endian_to_int(fields[0])
                if embedded_chain_id != self.chain_id:
                    raise SenderRecoveryError(
                        f"Transaction {transaction.hash} is signed for chain {embedded_chain_id}, expected {self.chain_id}"
                    )
                return

            fields = rlp.decode(raw)
            v = big_endian_to_int(fields[6])
        except (rlp.DecodingError, IndexError, TypeError) as e:
            raise SenderRecoveryError(f"Cannot decode signed payload of transaction {transaction.hash}: {e}") from e

        if v in LEGACY_UNPROTECTED_V:
            return
        chain_id_x2 = 2 * self.chain_id
        if v not in (EIP155_V_OFFSET + chain_id_x2, EIP155_V_OFFSET + 1 + chain_id_x2):
            raise SenderRecoveryError(f"Transaction {transaction.hash} has v={v}, invalid for chain {self.chain_id}")


def make_signer(chain_id: Optional[int], block_number: int) -> TransactionSigner:
    """
    Returns the signer for transactions included at ``block_number``.

    Every rule the relay checks is valid for all blocks, so the block number
    does not change the result; it is kept so callers resolve signers per block.
    """
    return TransactionSigner(chain_id=chain_id)
