"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Signer built from the development key
- Async executor bound to the mocked Web3
- Fee plan and signed envelopes
"""

import pytest

from txrelay.services.blockchain.async_executor import AsyncBlockchainExecutor
from txrelay.services.blockchain.gas_operations import derive_fee_plan
from txrelay.services.blockchain.models import RevertingCall, Transfer
from txrelay.services.blockchain.transaction_operations import TransactionBuilder
from txrelay.services.blockchain.wallet_operations import Signer


@pytest.fixture
def signer(dev_private_key):
    """
    Signer holding the development key.

    Returns:
        Signer: Signer instance
    """
    return Signer.from_key(dev_private_key)


@pytest.fixture
def executor(mock_web3):
    """
    Async executor bound to the mocked Web3.

    Yields:
        AsyncBlockchainExecutor: Executor, cleaned up after the test
    """
    executor = AsyncBlockchainExecutor(mock_web3, max_workers=4)
    yield executor
    executor.cleanup()


@pytest.fixture
def fee_plan():
    """Fee plan for a 1 Gwei base fee."""
    return derive_fee_plan(1_000_000_000)


@pytest.fixture
def transfer_envelope(signer, fee_plan):
    """Signed transfer envelope (nonce 7, chain 1301)."""
    return TransactionBuilder().build(
        signer, nonce=7, chain_id=1301, fee_plan=fee_plan, mode=Transfer()
    )


@pytest.fixture
def reverting_envelope(signer, fee_plan):
    """Signed reverting contract-creation envelope (nonce 7, chain 1301)."""
    return TransactionBuilder().build(
        signer, nonce=7, chain_id=1301, fee_plan=fee_plan, mode=RevertingCall()
    )
