"""
Submission operations.

This module handles:
- Public broadcast via eth_sendRawTransaction
- Private relay submission via eth_sendBundle

Exactly one submission attempt is made per envelope. There is no fallback
from one path to the other.
"""

from loguru import logger
from web3 import Web3

from txrelay.config.constants import BLOCKCHAIN_EXECUTOR_TIMEOUT, CONFIRMATION_TIMEOUT
from txrelay.utils.exceptions import SubmissionError

from .async_executor import AsyncBlockchainExecutor
from .core_constants import SEND_BUNDLE_METHOD
from .models import (
    Bundle,
    BundleResult,
    SignedEnvelope,
    SubmissionHandle,
    SubmissionKind,
)
from .state_operations import REMOTE_ERRORS


class SubmissionRouter:
    """
    Sends a signed envelope through the public pool or a relay bundle.
    """

    def __init__(
        self,
        executor: AsyncBlockchainExecutor,
        confirmation_timeout: float = CONFIRMATION_TIMEOUT,
        request_timeout: float = BLOCKCHAIN_EXECUTOR_TIMEOUT,
    ) -> None:
        """
        Initialize submission router.

        Args:
            executor: Async executor bound to the endpoint
            confirmation_timeout: Timeout attached to returned handles
            request_timeout: Timeout for the submission request itself
        """
        self.executor = executor
        self.confirmation_timeout = confirmation_timeout
        self.request_timeout = request_timeout

    async def submit(self, envelope: SignedEnvelope, use_bundle: bool) -> SubmissionHandle:
        """
        Submit envelope through the selected path.

        Args:
            envelope: Signed envelope
            use_bundle: True for relay bundle, False for public broadcast

        Returns:
            SubmissionHandle keyed by the hash the endpoint returned

        Raises:
            SubmissionError: If the submission attempt fails
        """
        if use_bundle:
            return await self.send_bundle(envelope)
        return await self.send_raw_transaction(envelope)

    async def send_raw_transaction(self, envelope: SignedEnvelope) -> SubmissionHandle:
        """Broadcast raw envelope to the public transaction pool."""
        try:
            tx_hash = await self.executor.run(
                lambda w3: w3.eth.send_raw_transaction(envelope.raw),
                timeout=self.request_timeout,
                operation_name="eth_sendRawTransaction",
            )
        except (TimeoutError, *REMOTE_ERRORS) as e:
            logger.error(f"Failed to broadcast transaction: {e}")
            raise SubmissionError(f"Failed to broadcast transaction: {e}", path="broadcast") from e

        tx_hash_str = Web3.to_hex(tx_hash)
        if tx_hash_str.lower() != envelope.tx_hash.lower():
            logger.warning(
                f"Endpoint returned hash {tx_hash_str}, "
                f"local hash is {envelope.tx_hash}"
            )

        logger.info(f"Transaction broadcast: {tx_hash_str}")
        return SubmissionHandle(
            kind=SubmissionKind.TRANSACTION,
            hash=tx_hash_str,
            timeout=self.confirmation_timeout,
            tx_hash=envelope.tx_hash,
        )

    async def send_bundle(
        self,
        envelope: SignedEnvelope,
        max_block_number: int | None = None,
    ) -> SubmissionHandle:
        """
        Submit envelope as the only entry of a relay bundle.

        Args:
            envelope: Signed envelope
            max_block_number: Last block the bundle may land in (None: unbounded)

        Returns:
            SubmissionHandle keyed by the relay's bundleHash
        """
        bundle = Bundle(txs=(envelope.raw,), max_block_number=max_block_number)
        try:
            result = await self.executor.run(
                lambda w3: w3.manager.request_blocking(SEND_BUNDLE_METHOD, [bundle.to_rpc()]),
                timeout=self.request_timeout,
                operation_name=SEND_BUNDLE_METHOD,
            )
            bundle_result = BundleResult.from_rpc(result)
        except (TimeoutError, *REMOTE_ERRORS) as e:
            logger.error(f"Failed to send bundle: {e}")
            raise SubmissionError(f"Failed to send bundle: {e}", path="bundle") from e

        logger.info(
            f"Bundle sent: {bundle_result.bundle_hash} "
            f"(tx {envelope.tx_hash})"
        )
        return SubmissionHandle(
            kind=SubmissionKind.BUNDLE,
            hash=bundle_result.bundle_hash,
            timeout=self.confirmation_timeout,
            tx_hash=envelope.tx_hash,
        )
