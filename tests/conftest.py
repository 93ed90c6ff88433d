"""Pytest configuration and fixtures."""

import pytest

from swapstake.config import DEFAULT_WORKFLOW_CONFIG, WorkflowConfig
from tests.helpers.fakes import FakeChainClient


@pytest.fixture
def config() -> WorkflowConfig:
    """Default Sepolia configuration."""
    return DEFAULT_WORKFLOW_CONFIG


@pytest.fixture
def fake_client(config: WorkflowConfig) -> FakeChainClient:
    """Fake chain client with no contracts configured yet."""
    return FakeChainClient(config=config)
