"""Errors raised by the chain client."""


class ChainError(Exception):
    """Base error for transaction submission and confirmation."""

    pass


class TransactionReverted(ChainError):
    """Transaction was mined with status 0."""

    def __init__(self, tx_hash: str) -> None:
        super().__init__(f"Transaction reverted: {tx_hash}")
        self.tx_hash = tx_hash


class TransactionTimeout(ChainError):
    """No receipt arrived within the configured wait."""

    def __init__(self, tx_hash: str, timeout: float) -> None:
        super().__init__(f"Transaction {tx_hash} not mined after {timeout:g}s")
        self.tx_hash = tx_hash
        self.timeout = timeout
