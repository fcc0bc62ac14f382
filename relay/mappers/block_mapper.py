# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from typing import Any, Dict

from relay.mappers.transaction_mapper import EthTransactionMapper
from relay.models.block import EthBlock, EthBlockHeader
from utils.formatter_utils import hex_to_dec, to_hex, to_normalized_address


class EthBlockMapper(object):
    def __init__(self, transaction_mapper=None):
        self.transaction_mapper = transaction_mapper or EthTransactionMapper()

    def json_dict_to_block(self, json_dict: Dict[str, Any]) -> EthBlock:
        header = EthBlockHeader(
            parent_hash=to_hex(json_dict.get("parentHash")),
            state_root=to_hex(json_dict.get("stateRoot")),
            transactions_root=to_hex(json_dict.get("transactionsRoot")),
            receipts_root=to_hex(json_dict.get("receiptsRoot")),
            miner=to_normalized_address(json_dict.get("miner")),
            timestamp=hex_to_dec(json_dict.get("timestamp")),
            gas_limit=hex_to_dec(json_dict.get("gasLimit")),
            gas_used=hex_to_dec(json_dict.get("gasUsed")),
            base_fee_per_gas=hex_to_dec(json_dict.get("baseFeePerGas")),
            extra_data=to_hex(json_dict.get("extraData")),
        )

        transactions = [
            self.transaction_mapper.json_dict_to_transaction(tx)
            for tx in json_dict.get("transactions") or []
            if isinstance(tx, dict)
        ]

        return EthBlock(
            hash=to_hex(json_dict.get("hash")),
            number=hex_to_dec(json_dict.get("number")),
            header=header,
            transactions=transactions,
        )
