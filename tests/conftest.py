"""Pytest configuration and shared fixtures for all tests."""

import os
from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from web3 import Web3

# Keep tests independent of the developer's shell and .env
for _var in ("PRIVATE_KEY", "RPC_URL", "CONFIRMATION_TIMEOUT", "POLL_INTERVAL", "LOG_LEVEL"):
    os.environ.pop(_var, None)


# First anvil/hardhat development account
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

SAMPLE_BUNDLE_HASH = "0x" + "be" * 32


@pytest.fixture
def dev_private_key():
    """Well-known development private key."""
    return DEV_PRIVATE_KEY


@pytest.fixture
def dev_address():
    """Address derived from the development key."""
    return DEV_ADDRESS


@pytest.fixture
def sample_bundle_hash():
    """Bundle hash returned by the mocked relay."""
    return SAMPLE_BUNDLE_HASH


@pytest.fixture
def mock_web3():
    """
    Mock Web3 instance answering like a funded dev chain.

    - chain id 1301, nonce 7, balance 1 ETH, base fee 1 Gwei
    - send_raw_transaction returns keccak of the raw envelope
    - eth_sendBundle returns SAMPLE_BUNDLE_HASH
    - receipts are available immediately
    """
    w3 = MagicMock()
    w3.eth.chain_id = 1301
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.get_balance.return_value = 10**18
    w3.eth.get_block.return_value = {"number": 100, "baseFeePerGas": 1_000_000_000}
    w3.eth.send_raw_transaction.side_effect = lambda raw: Web3.keccak(raw)
    w3.manager.request_blocking.return_value = {"bundleHash": SAMPLE_BUNDLE_HASH}

    def _receipt(tx_hash, timeout=None, poll_latency=None):
        return {
            "transactionHash": HexBytes(tx_hash),
            "blockNumber": 101,
            "status": 1,
        }

    w3.eth.wait_for_transaction_receipt.side_effect = _receipt
    return w3
