from typing import Optional


class RelayError(Exception):
    """Base class for every error that aborts the processing of a block."""

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class CountMismatchError(RelayError):
    def __init__(self, transaction_count: int, receipt_count: int):
        super().__init__(
            f"Transaction and receipt count mismatch: {transaction_count} transactions, {receipt_count} receipts"
        )
        self.transaction_count = transaction_count
        self.receipt_count = receipt_count


class DerivationError(RelayError):
    pass


class SenderRecoveryError(DerivationError):
    pass


class RetrievalError(RelayError):
    pass


class SerializationError(RelayError):
    pass


class PublishError(RelayError):
    pass
