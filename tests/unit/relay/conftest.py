import pytest

from relay_factories import make_block, make_creation, make_receipt, make_transfer, sign_creation


@pytest.fixture
def two_transaction_block():
    """A transfer with 21000 gas followed by a contract creation with nonce 5."""
    return make_block([
        make_transfer(1, value=10**30),
        make_creation(2, nonce=5, raw=sign_creation(5)),
    ])


@pytest.fixture
def two_raw_receipts():
    return [make_receipt(21000, log_count=2), make_receipt(50000, log_count=1)]
