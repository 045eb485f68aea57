"""Unit tests for chain state reads."""

import time

import pytest
from requests.exceptions import ConnectionError as RequestsConnectionError
from web3.exceptions import Web3Exception

from txrelay.services.blockchain.state_operations import ChainStateReader
from txrelay.utils.exceptions import MissingBaseFeeError, RemoteQueryError


class TestChainStateReader:
    """Tests for ChainStateReader."""

    @pytest.mark.asyncio
    async def test_fetch_snapshot(self, executor, mock_web3, dev_address):
        """All four reads end up in the snapshot."""
        snapshot = await ChainStateReader(executor).fetch_snapshot(dev_address)

        assert snapshot.chain_id == 1301
        assert snapshot.nonce == 7
        assert snapshot.balance == 10**18
        assert snapshot.base_fee == 1_000_000_000
        mock_web3.eth.get_transaction_count.assert_called_once_with(dev_address)
        mock_web3.eth.get_balance.assert_called_once_with(dev_address)
        mock_web3.eth.get_block.assert_called_once_with("latest")

    @pytest.mark.asyncio
    async def test_address_is_checksummed(self, executor, mock_web3, dev_address):
        """Lower-case addresses are checksummed before querying."""
        await ChainStateReader(executor).get_nonce(dev_address.lower())

        mock_web3.eth.get_transaction_count.assert_called_once_with(dev_address)

    @pytest.mark.asyncio
    async def test_missing_base_fee(self, executor, mock_web3, dev_address):
        """Pre-London blocks abort with MissingBaseFeeError."""
        mock_web3.eth.get_block.return_value = {"number": 100}

        with pytest.raises(MissingBaseFeeError):
            await ChainStateReader(executor).fetch_snapshot(dev_address)

    @pytest.mark.asyncio
    async def test_missing_base_fee_is_remote_query_error(self, executor, mock_web3):
        """MissingBaseFeeError is reported under the base_fee query."""
        mock_web3.eth.get_block.return_value = {"number": 100, "baseFeePerGas": None}

        with pytest.raises(RemoteQueryError) as exc_info:
            await ChainStateReader(executor).get_base_fee()
        assert exc_info.value.step == "query:base_fee"

    @pytest.mark.asyncio
    async def test_zero_base_fee_is_valid(self, executor, mock_web3):
        """A base fee of zero is present, not missing."""
        mock_web3.eth.get_block.return_value = {"baseFeePerGas": 0}

        assert await ChainStateReader(executor).get_base_fee() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            RequestsConnectionError("connection refused"),
            Web3Exception("rpc error"),
            ValueError({"code": -32000, "message": "boom"}),
        ],
    )
    async def test_remote_errors_wrapped(self, executor, mock_web3, dev_address, error):
        """Transport and RPC errors become RemoteQueryError."""
        mock_web3.eth.get_balance.side_effect = error

        with pytest.raises(RemoteQueryError) as exc_info:
            await ChainStateReader(executor).fetch_snapshot(dev_address)
        assert exc_info.value.query == "balance"
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_read_timeout(self, executor, mock_web3, dev_address):
        """A hanging read fails after the reader timeout."""
        mock_web3.eth.get_transaction_count.side_effect = lambda address: time.sleep(1)

        started = time.monotonic()
        with pytest.raises(RemoteQueryError) as exc_info:
            await ChainStateReader(executor, timeout=0.1).get_nonce(dev_address)

        assert time.monotonic() - started < 0.9
        assert exc_info.value.query == "nonce"

    @pytest.mark.asyncio
    async def test_no_retry(self, executor, mock_web3, dev_address):
        """A failed read is attempted exactly once."""
        mock_web3.eth.get_transaction_count.side_effect = Web3Exception("down")

        with pytest.raises(RemoteQueryError):
            await ChainStateReader(executor).get_nonce(dev_address)
        assert mock_web3.eth.get_transaction_count.call_count == 1
