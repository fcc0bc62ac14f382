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

from relay.models.transaction import EthTransaction
from utils.formatter_utils import hex_to_dec, to_hex, to_normalized_address


class EthTransactionMapper(object):
    @staticmethod
    def json_dict_to_transaction(json_dict: Dict[str, Any]) -> EthTransaction:
        return EthTransaction(
            hash=to_hex(json_dict.get("hash")),
            nonce=hex_to_dec(json_dict.get("nonce")) or 0,
            to_address=to_normalized_address(json_dict.get("to")),
            input=to_hex(json_dict.get("input")) or "0x",
            value=hex_to_dec(json_dict.get("value")) or 0,
            transaction_type=hex_to_dec(json_dict.get("type")) or 0,
            chain_id=hex_to_dec(json_dict.get("chainId")),
            # Not part of eth_getBlockByNumber, attached by the block source
            raw=to_hex(json_dict.get("raw")),
        )
