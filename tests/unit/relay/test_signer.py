import pytest
import rlp

from relay.derivation.signer import TransactionSigner, make_signer
from relay.exceptions import SenderRecoveryError
from relay.models.transaction import EthTransaction
from relay_factories import ACCOUNT, make_creation, sign_creation


def test_recovers_sender_of_protected_legacy_transaction():
    signer = make_signer(1, 100)
    tx = make_creation(1, nonce=5, raw=sign_creation(5, chain_id=1))

    assert signer.sender(tx) == ACCOUNT.address


def test_signer_without_chain_id_accepts_any_chain():
    tx = make_creation(1, nonce=0, raw=sign_creation(0, chain_id=5))

    assert TransactionSigner().sender(tx) == ACCOUNT.address


def test_rejects_transaction_signed_for_another_chain():
    signer = TransactionSigner(chain_id=5)
    tx = make_creation(1, nonce=0, raw=sign_creation(0, chain_id=1))

    with pytest.raises(SenderRecoveryError, match="invalid for chain 5"):
        signer.sender(tx)


def test_rejects_typed_transaction_for_another_chain():
    signer = TransactionSigner(chain_id=1)
    payload = b"\x02" + rlp.encode([5, 0, 1, 1, 21000, b"", 0, b"", [], 0, 1, 1])
    tx = make_creation(1, nonce=0, raw="0x" + payload.hex())

    with pytest.raises(SenderRecoveryError, match="signed for chain 5"):
        signer.sender(tx)


def test_missing_signed_payload():
    with pytest.raises(SenderRecoveryError, match="no signed payload"):
        TransactionSigner(chain_id=1).sender(make_creation(1, nonce=0))


def test_garbage_payload():
    tx = EthTransaction(hash="0x01", nonce=0, raw="0xc0ffee")

    with pytest.raises(SenderRecoveryError):
        TransactionSigner(chain_id=1).sender(tx)
