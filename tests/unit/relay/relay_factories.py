from eth_account import Account

from relay.models.block import EthBlock, EthBlockHeader
from relay.models.receipt import EthReceipt
from relay.models.receipt_log import EthReceiptLog
from relay.models.transaction import EthTransaction

PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
BLOCK_HASH = "0x" + "ab" * 32
STATE_ROOT = "0x" + "cd" * 32
DESTINATION = "0x6Ac7Ea33F8831eA9DcC53393AAa88B25A785DbF0"

ACCOUNT = Account.from_key(PRIVATE_KEY)


def sign_creation(nonce: int, chain_id: int = 1) -> str:
    signed = ACCOUNT.sign_transaction({
        "nonce": nonce,
        "gasPrice": 1_000_000_000,
        "gas": 200_000,
        "value": 0,
        "data": "0x6000",
        "chainId": chain_id,
    })
    return "0x" + bytes(signed.raw_transaction).hex()


def make_transfer(index: int, nonce: int = 0, value: int = 0) -> EthTransaction:
    return EthTransaction(
        hash="0x" + f"{index:02x}" * 32, nonce=nonce, to_address=DESTINATION, input="0xa9059cbb", value=value
    )


def make_creation(index: int, nonce: int, raw: str | None = None) -> EthTransaction:
    return EthTransaction(hash="0x" + f"{index:02x}" * 32, nonce=nonce, to_address=None, input="0x6000", raw=raw)


def make_block(transactions, number: int = 100, block_hash: str = BLOCK_HASH) -> EthBlock:
    return EthBlock(
        hash=block_hash,
        number=number,
        header=EthBlockHeader(parent_hash="0x" + "00" * 32, state_root=STATE_ROOT),
        transactions=transactions,
    )


def make_receipt(cumulative_gas_used: int, log_count: int = 0) -> EthReceipt:
    return EthReceipt(
        status=1,
        cumulative_gas_used=cumulative_gas_used,
        logs=[
            EthReceiptLog(address=DESTINATION, topics=["0x" + "11" * 32], data="0x")
            for _ in range(log_count)
        ],
    )
