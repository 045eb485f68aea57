"""Unit tests for confirmation tracking."""

import time

import pytest
from hexbytes import HexBytes
from requests.exceptions import ReadTimeout
from web3.exceptions import TimeExhausted, Web3Exception

from txrelay.services.blockchain.confirmation_operations import ConfirmationWatcher
from txrelay.services.blockchain.models import (
    Confirmed,
    SubmissionHandle,
    SubmissionKind,
    TimedOut,
    WatchError,
)


TX_HASH = "0x" + "11" * 32


def make_handle(kind=SubmissionKind.TRANSACTION, hash_=TX_HASH, timeout=20.0):
    return SubmissionHandle(kind=kind, hash=hash_, timeout=timeout, tx_hash=TX_HASH)


class TestConfirmationWatcher:
    """Tests for ConfirmationWatcher.watch."""

    @pytest.mark.asyncio
    async def test_confirmed(self, executor, mock_web3):
        """Receipt found: Confirmed with block and status."""
        outcome = await ConfirmationWatcher(executor).watch(make_handle())

        assert isinstance(outcome, Confirmed)
        assert outcome.final_hash == TX_HASH
        assert outcome.block_number == 101
        assert outcome.reverted is False

    @pytest.mark.asyncio
    async def test_polls_handle_hash_with_timeout(self, executor, mock_web3):
        """Handle hash, timeout and poll interval are passed to web3."""
        await ConfirmationWatcher(executor, poll_interval=0.25).watch(make_handle(timeout=3.0))

        mock_web3.eth.wait_for_transaction_receipt.assert_called_once_with(
            TX_HASH, timeout=3.0, poll_latency=0.25
        )

    @pytest.mark.asyncio
    async def test_bundle_handle_polled_by_bundle_hash(self, executor, mock_web3, sample_bundle_hash):
        """Bundle handles are watched through their bundle hash."""
        handle = make_handle(kind=SubmissionKind.BUNDLE, hash_=sample_bundle_hash)

        outcome = await ConfirmationWatcher(executor).watch(handle)

        assert isinstance(outcome, Confirmed)
        assert mock_web3.eth.wait_for_transaction_receipt.call_args.args[0] == sample_bundle_hash

    @pytest.mark.asyncio
    async def test_reverted_receipt(self, executor, mock_web3):
        """A mined but reverted transaction is still Confirmed."""
        mock_web3.eth.wait_for_transaction_receipt.side_effect = None
        mock_web3.eth.wait_for_transaction_receipt.return_value = {
            "transactionHash": HexBytes(TX_HASH),
            "blockNumber": 9,
            "status": 0,
        }

        outcome = await ConfirmationWatcher(executor).watch(make_handle())

        assert isinstance(outcome, Confirmed)
        assert outcome.reverted is True

    @pytest.mark.asyncio
    async def test_time_exhausted(self, executor, mock_web3):
        """web3's TimeExhausted maps to TimedOut."""
        mock_web3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted("not mined")

        outcome = await ConfirmationWatcher(executor).watch(make_handle())

        assert outcome == TimedOut(hash=TX_HASH, timeout=20.0)

    @pytest.mark.asyncio
    async def test_hard_ceiling(self, executor, mock_web3):
        """A call that hangs past the timeout is cut off by the watcher."""
        mock_web3.eth.wait_for_transaction_receipt.side_effect = (
            lambda *args, **kwargs: time.sleep(1)
        )

        started = time.monotonic()
        outcome = await ConfirmationWatcher(executor).watch(make_handle(timeout=0.1))

        assert isinstance(outcome, TimedOut)
        assert time.monotonic() - started < 0.9

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [Web3Exception("filter not found"), ReadTimeout("read timed out"), ValueError("bad")],
    )
    async def test_remote_error(self, executor, mock_web3, error):
        """Remote failures are returned as WatchError, never raised."""
        mock_web3.eth.wait_for_transaction_receipt.side_effect = error

        outcome = await ConfirmationWatcher(executor).watch(make_handle())

        assert isinstance(outcome, WatchError)
        assert outcome.hash == TX_HASH
        assert outcome.cause
