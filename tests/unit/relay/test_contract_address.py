import pytest
from eth_utils import to_checksum_address

from relay.derivation.contract_address import ZERO_ADDRESS, compute_contract_address

SENDER = "0x6ac7ea33f8831ea9dcc53393aaa88b25a785dbf0"


@pytest.mark.parametrize("nonce, expected", [
    (0, "0xcd234a471b72ba2f1ccf0a70fcaba648a5eecd8d"),
    (1, "0x343c43a37d37dff08ae8c4a11544c718abb4fcf8"),
    (2, "0xf778b86fa74e846c4f0a1fbd1335fe81c00a0c91"),
])
def test_known_create_addresses(nonce, expected):
    assert compute_contract_address(SENDER, nonce).lower() == expected


def test_result_is_checksummed():
    address = compute_contract_address(SENDER, 0)
    assert address == to_checksum_address(address)


def test_zero_sender_is_accepted():
    assert compute_contract_address(ZERO_ADDRESS, 0).startswith("0x")


def test_negative_nonce_rejected():
    with pytest.raises(ValueError):
        compute_contract_address(SENDER, -1)
