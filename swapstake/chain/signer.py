"""Local transaction signing.

The private key is only ever held inside the wrapped ``eth_account`` account;
it is never transmitted, logged or exposed through ``repr``.
"""

from __future__ import annotations

from typing import Any

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount
from pydantic import SecretStr


class SigningIdentity:
    """Signs transactions for one account."""

    __slots__ = ("_account",)

    def __init__(self, private_key: SecretStr) -> None:
        try:
            self._account: LocalAccount = Account.from_key(private_key.get_secret_value())
        except Exception:
            # Drop the original exception, its message can embed the key.
            raise ValueError("PRIVATE_KEY is not a valid private key") from None

    @property
    def address(self) -> str:
        """Checksummed address of the signing account."""
        return self._account.address

    def sign_transaction(self, tx: dict[str, Any]) -> SignedTransaction:
        return self._account.sign_transaction(tx)

    def __repr__(self) -> str:
        return f"SigningIdentity(address={self.address})"


__all__ = ["SigningIdentity"]
