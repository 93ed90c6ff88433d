"""Tests for TokenAllowanceManager."""

import pytest
from structlog.testing import capture_logs
from web3 import Web3

from swapstake.allowance import TokenAllowanceManager
from swapstake.chain import TransactionReverted, TransactionTimeout
from swapstake.config import SEPOLIA_LINK, SEPOLIA_USDC
from swapstake.errors import ApprovalError, ApprovalPurpose
from tests.helpers import MASTERCHEF_ADDRESS, SWAP_ROUTER_ADDRESS, USDC


class TestApprove:
    def test_swap_approval_scales_by_token_decimals(self, fake_client):
        """1 USDC is approved as 1,000,000 for the router."""
        manager = TokenAllowanceManager(fake_client)

        receipt = manager.approve(
            SEPOLIA_USDC, 1, spender=SWAP_ROUTER_ADDRESS, purpose=ApprovalPurpose.SWAP
        )

        token = fake_client.contract(USDC, [])
        token.functions.approve.assert_called_once_with(
            Web3.to_checksum_address(SWAP_ROUTER_ADDRESS), 1_000_000
        )
        assert fake_client.actions == ["approve_swap"]
        assert receipt["status"] == 1

    def test_stake_approval_uses_18_decimals(self, fake_client):
        """0.5 LINK is approved as 5e17 for the staking contract."""
        manager = TokenAllowanceManager(fake_client)

        manager.approve(
            SEPOLIA_LINK, "0.5", spender=MASTERCHEF_ADDRESS, purpose=ApprovalPurpose.STAKE
        )

        token = fake_client.contract(SEPOLIA_LINK.address, [])
        token.functions.approve.assert_called_once_with(
            Web3.to_checksum_address(MASTERCHEF_ADDRESS), 500_000_000_000_000_000
        )
        assert fake_client.actions == ["approve_stake"]

    @pytest.mark.parametrize(
        "failure",
        [
            TransactionReverted("0x01"),
            TransactionTimeout("0x01", 180),
            ValueError("insufficient funds for gas"),
        ],
    )
    def test_failures_become_approval_error(self, fake_client, failure):
        fake_client.failures["approve_swap"] = failure
        manager = TokenAllowanceManager(fake_client)

        with pytest.raises(ApprovalError, match="approval for swap failed") as exc_info:
            manager.approve(
                SEPOLIA_USDC, 1, spender=SWAP_ROUTER_ADDRESS, purpose=ApprovalPurpose.SWAP
            )

        error = exc_info.value
        assert error.purpose is ApprovalPurpose.SWAP
        assert error.token == SEPOLIA_USDC.address
        assert error.cause is failure
        assert error.__cause__ is failure

    def test_failure_is_logged_with_underlying_message(self, fake_client):
        fake_client.failures["approve_stake"] = TransactionReverted("0xbeef")
        manager = TokenAllowanceManager(fake_client)

        with capture_logs() as logs, pytest.raises(ApprovalError):
            manager.approve(
                SEPOLIA_LINK, 1, spender=MASTERCHEF_ADDRESS, purpose=ApprovalPurpose.STAKE
            )

        failed = [entry for entry in logs if entry["event"] == "approval_failed"]
        assert len(failed) == 1
        assert failed[0]["purpose"] == "stake"
        assert "0xbeef" in failed[0]["error"]

    def test_invalid_amount_fails_before_submission(self, fake_client):
        manager = TokenAllowanceManager(fake_client)

        with pytest.raises(ApprovalError) as exc_info:
            manager.approve(
                SEPOLIA_USDC, "0.0000001", spender=SWAP_ROUTER_ADDRESS, purpose=ApprovalPurpose.SWAP
            )

        assert isinstance(exc_info.value.cause, ValueError)
        assert fake_client.transactions == []
