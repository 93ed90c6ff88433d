"""Read/write connection to a JSON-RPC node.

All state-changing calls go through :meth:`ChainClient.transact`, which
implements the submit-then-confirm half of every workflow step: build the
transaction, sign it locally, broadcast it and block until the receipt
arrives or the configured wait expires.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from web3 import Web3
from web3.contract import Contract
from web3.contract.contract import ContractFunction
from web3.exceptions import TimeExhausted
from web3.types import TxReceipt

from swapstake.chain.errors import TransactionReverted, TransactionTimeout
from swapstake.chain.signer import SigningIdentity
from swapstake.config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig

logger = structlog.get_logger()

# Per-request HTTP timeout for RPC calls (seconds)
RPC_REQUEST_TIMEOUT = 30


def receipt_tx_hash(receipt: Mapping[str, Any]) -> str:
    """Transaction hash of a receipt as a 0x-prefixed hex string."""
    return Web3.to_hex(receipt["transactionHash"])


class ChainClient:
    """Contract factory and transaction sender bound to one signer.

    Args:
        w3: Connected Web3 instance
        signer: Identity used to sign every transaction
        config: Deployment configuration (chain id, explorer, receipt wait)
    """

    def __init__(
        self,
        w3: Web3,
        signer: SigningIdentity,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
    ) -> None:
        self.w3 = w3
        self.config = config
        self._signer = signer

    @classmethod
    def connect(
        cls,
        rpc_url: str,
        signer: SigningIdentity,
        config: WorkflowConfig = DEFAULT_WORKFLOW_CONFIG,
    ) -> ChainClient:
        """Connect to ``rpc_url`` and check it serves the configured chain.

        Raises:
            ConnectionError: If the node does not answer
            ValueError: If the node reports a different chain id
        """
        w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": RPC_REQUEST_TIMEOUT}))
        # RPC URLs often embed API keys, keep them out of messages.
        if not w3.is_connected():
            raise ConnectionError("Failed to connect to RPC node")

        node_chain_id = w3.eth.chain_id
        if node_chain_id != config.chain_id:
            raise ValueError(
                f"RPC node serves chain {node_chain_id}, configuration expects {config.chain_id}"
            )

        logger.info("chain_connected", chain_id=node_chain_id, address=signer.address)
        return cls(w3, signer, config)

    @property
    def address(self) -> str:
        """Address that signs and pays for transactions."""
        return self._signer.address

    def contract(self, address: str, abi: list[dict[str, Any]]) -> Contract:
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def explorer_tx_url(self, tx_hash: str) -> str:
        return self.config.explorer_tx_url(tx_hash)

    def transact(self, fn: ContractFunction, *, action: str) -> TxReceipt:
        """Sign, send and wait for a contract call.

        Gas and fee fields are left for web3 to fill from the node.

        Args:
            fn: Bound contract function (e.g. ``token.functions.approve(...)``)
            action: Short label used in log lines

        Returns:
            The mined receipt (status 1)

        Raises:
            TransactionReverted: If the transaction was mined with status 0
            TransactionTimeout: If no receipt arrived within ``receipt_timeout``
        """
        tx = fn.build_transaction(
            {
                "from": self.address,
                "chainId": self.config.chain_id,
                "nonce": self.w3.eth.get_transaction_count(self.address, "pending"),
            }
        )
        signed = self._signer.sign_transaction(tx)
        tx_hash = Web3.to_hex(self.w3.eth.send_raw_transaction(signed.raw_transaction))
        logger.info("transaction_sent", action=action, tx_hash=tx_hash)

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.config.receipt_timeout,
                poll_latency=self.config.poll_latency,
            )
        except TimeExhausted as e:
            raise TransactionTimeout(tx_hash, self.config.receipt_timeout) from e

        if receipt["status"] != 1:
            raise TransactionReverted(tx_hash)

        logger.info(
            "transaction_confirmed",
            action=action,
            tx_hash=tx_hash,
            block_number=receipt.get("blockNumber"),
            explorer_url=self.explorer_tx_url(tx_hash),
        )
        return receipt


__all__ = ["ChainClient", "receipt_tx_hash", "RPC_REQUEST_TIMEOUT"]
