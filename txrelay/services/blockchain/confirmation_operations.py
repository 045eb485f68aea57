"""
Confirmation tracking.

Waits for inclusion of a submitted transaction or bundle. The wait is
bounded by the handle's timeout; every ending (confirmed, timed out,
remote error) is returned as a value, never raised.
"""

from loguru import logger
from web3 import Web3
from web3.exceptions import TimeExhausted

from txrelay.config.constants import CONFIRMATION_POLL_INTERVAL

from .async_executor import AsyncBlockchainExecutor
from .models import Confirmed, SubmissionHandle, TimedOut, WatchError
from .state_operations import REMOTE_ERRORS


class ConfirmationWatcher:
    """
    Polls the endpoint for the receipt referenced by a submission handle.
    """

    def __init__(
        self,
        executor: AsyncBlockchainExecutor,
        poll_interval: float = CONFIRMATION_POLL_INTERVAL,
    ) -> None:
        """
        Initialize confirmation watcher.

        Args:
            executor: Async executor bound to the endpoint
            poll_interval: Receipt polling interval in seconds
        """
        self.executor = executor
        self.poll_interval = poll_interval

    async def watch(self, handle: SubmissionHandle) -> Confirmed | TimedOut | WatchError:
        """
        Wait for inclusion of the handle's hash.

        The wait runs on a daemon thread capped at handle.timeout, so a
        hanging RPC call can extend neither the wait nor process exit.

        Args:
            handle: Handle returned by the submission router

        Returns:
            Confirmed, TimedOut or WatchError
        """
        timeout = handle.timeout
        logger.info(f"Waiting up to {timeout}s for {handle.label} {handle.hash}")

        def _wait(w3: Web3):
            return w3.eth.wait_for_transaction_receipt(
                handle.hash,
                timeout=timeout,
                poll_latency=self.poll_interval,
            )

        try:
            receipt = await self.executor.run_detached(
                _wait,
                timeout=timeout,
                operation_name=f"wait for {handle.label}",
            )
        except (TimeoutError, TimeExhausted):
            logger.warning(f"No inclusion of {handle.hash} after {timeout}s")
            return TimedOut(hash=handle.hash, timeout=timeout)
        except REMOTE_ERRORS as e:
            logger.error(f"Error while waiting for {handle.hash}: {e}")
            return WatchError(hash=handle.hash, cause=str(e) or type(e).__name__)

        final_hash = receipt.get("transactionHash") or handle.hash
        status = receipt.get("status")
        outcome = Confirmed(
            final_hash=Web3.to_hex(final_hash) if isinstance(final_hash, bytes) else str(final_hash),
            block_number=receipt.get("blockNumber"),
            status=status,
        )
        if outcome.reverted:
            logger.warning(f"Transaction {outcome.final_hash} mined but reverted")
        else:
            logger.success(
                f"Transaction {outcome.final_hash} mined in block {outcome.block_number}"
            )
        return outcome
