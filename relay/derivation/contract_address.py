import rlp
from eth_utils import keccak, to_canonical_address

from utils.formatter_utils import to_normalized_address

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def compute_contract_address(sender: str, nonce: int) -> str:
    """
    Computes the address of a contract deployed by ``sender`` in a transaction with ``nonce``.

    The address is the last 20 bytes of ``keccak256(rlp([sender, nonce]))``.
    """
    if nonce < 0:
        raise ValueError(f"Nonce must be non-negative, got {nonce}")
    computed_address = keccak(rlp.encode([to_canonical_address(sender), nonce]))
    return to_normalized_address("0x" + computed_address[-20:].hex())
