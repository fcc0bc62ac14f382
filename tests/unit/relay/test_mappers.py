from eth_utils import to_checksum_address
from hexbytes import HexBytes

from relay.mappers.block_mapper import EthBlockMapper
from relay.mappers.receipt_mapper import EthReceiptMapper

RPC_RECEIPT = {
    "transactionHash": "0x" + "01" * 32,
    "blockHash": "0x" + "ab" * 32,
    "blockNumber": "0x64",
    "transactionIndex": "0x0",
    "cumulativeGasUsed": "0x5208",
    "gasUsed": "0x5208",
    "status": "0x1",
    "type": "0x2",
    "contractAddress": None,
    "logs": [
        {
            "address": "0x6ac7ea33f8831ea9dcc53393aaa88b25a785dbf0",
            "topics": ["0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"],
            "data": "0x",
            "logIndex": "0x0",
        }
    ],
}

RPC_BLOCK = {
    "number": "0x64",
    "hash": "0x" + "ab" * 32,
    "parentHash": "0x" + "00" * 32,
    "stateRoot": "0x" + "cd" * 32,
    "timestamp": "0x656565",
    "transactions": [
        {
            "hash": "0x" + "01" * 32,
            "nonce": "0x5",
            "to": None,
            "input": "0x6000",
            "value": "0xde0b6b3a7640000",
            "type": "0x0",
            "chainId": "0x1",
            "raw": "0xf86c",
        },
        "0xonly-a-hash",
    ],
}


def test_json_dict_to_receipt():
    receipt = EthReceiptMapper().json_dict_to_receipt(RPC_RECEIPT)

    assert receipt.cumulative_gas_used == 21000
    assert receipt.transaction_type == 2
    assert receipt.status == 1
    assert receipt.contract_address is None
    assert receipt.logs[0].address == to_checksum_address(RPC_RECEIPT["logs"][0]["address"])
    assert receipt.logs[0].log_index == 0


def test_json_dict_to_receipt_accepts_hexbytes():
    rpc_receipt = dict(RPC_RECEIPT, transactionHash=HexBytes("0x" + "01" * 32), logs=[])

    receipt = EthReceiptMapper().json_dict_to_receipt(rpc_receipt)

    assert receipt.transaction_hash == "0x" + "01" * 32
    assert receipt.logs == []


def test_json_dict_to_block():
    block = EthBlockMapper().json_dict_to_block(RPC_BLOCK)

    assert block.number == 100
    assert block.header.state_root == "0x" + "cd" * 32
    assert block.header.timestamp == 0x656565
    assert len(block.transactions) == 1

    tx = block.transactions[0]
    assert tx.is_contract_creation
    assert tx.nonce == 5
    assert tx.value == 10**18
    assert tx.chain_id == 1
    assert tx.raw == "0xf86c"
