"""
Send pipeline - Main coordinator.

This module provides the TransactionPipeline class that runs one send by
delegating to specialized managers:
- ChainStateReader: chain id, nonce, balance and base fee
- GasManager: fee plan
- TransactionBuilder: signed envelope
- SubmissionRouter: public broadcast or relay bundle
- ConfirmationWatcher: bounded wait for inclusion

All inputs are passed explicitly; nothing is read from global state.
"""

from collections.abc import Callable

from loguru import logger
from web3 import Web3

from txrelay.config.constants import (
    BLOCKCHAIN_EXECUTOR_TIMEOUT,
    BLOCKCHAIN_RPC_TIMEOUT,
    CONFIRMATION_POLL_INTERVAL,
)
from txrelay.utils.exceptions import PreconditionError
from txrelay.utils.security import mask_address, mask_sensitive

from .async_executor import AsyncBlockchainExecutor
from .confirmation_operations import ConfirmationWatcher
from .gas_operations import GasManager
from .models import ChainSnapshot, RunOptions, RunReport, destination_for
from .state_operations import ChainStateReader
from .submission_operations import SubmissionRouter
from .transaction_operations import TransactionBuilder
from .wallet_operations import Signer


def create_web3(rpc_url: str, request_timeout: int = BLOCKCHAIN_RPC_TIMEOUT) -> Web3:
    """
    Create Web3 instance for an HTTP endpoint.

    No request is made here; connection problems surface on the first read.
    """
    logger.debug(f"Connecting to RPC {mask_sensitive(rpc_url, show_chars=12)}")
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": request_timeout}))


def ensure_funded(snapshot: ChainSnapshot, address: str) -> None:
    """
    Abort when the signer has no balance at all.

    Raises:
        PreconditionError: If balance is zero
    """
    if snapshot.balance == 0:
        raise PreconditionError(
            f"Account {address} has zero balance on chain {snapshot.chain_id}; "
            f"fund it before sending"
        )


class TransactionPipeline:
    """
    Runs fetch -> fee plan -> build -> submit -> watch for one transaction.
    """

    def __init__(
        self,
        executor: AsyncBlockchainExecutor,
        poll_interval: float = CONFIRMATION_POLL_INTERVAL,
        request_timeout: float = BLOCKCHAIN_EXECUTOR_TIMEOUT,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            executor: Async executor bound to the endpoint
            poll_interval: Receipt polling interval in seconds
            request_timeout: Timeout for single RPC reads and the submission
        """
        self.executor = executor
        self.poll_interval = poll_interval
        self.request_timeout = request_timeout

        self.state_reader = ChainStateReader(executor, timeout=request_timeout)
        self.gas_manager = GasManager()
        self.builder = TransactionBuilder()
        self.watcher = ConfirmationWatcher(executor, poll_interval=poll_interval)

    async def run(
        self,
        signer: Signer,
        options: RunOptions,
        progress: Callable[[str], None] | None = None,
    ) -> RunReport:
        """
        Send one transaction and wait for it.

        Args:
            signer: Signer holding the sender key
            options: Mode flags and confirmation timeout
            progress: Optional sink for human-readable progress lines

        Returns:
            RunReport with the watch outcome

        Raises:
            RemoteQueryError: If a chain state read fails
            PreconditionError: If the signer balance is zero
            SigningError: If signing fails
            SubmissionError: If the submission attempt fails
        """
        emit = progress or (lambda line: None)
        address = signer.address

        snapshot = await self.state_reader.fetch_snapshot(address)
        emit(f"Current nonce: {snapshot.nonce}")

        ensure_funded(snapshot, address)

        fee_plan = self.gas_manager.plan_fees(snapshot.base_fee)
        self.gas_manager.check_affordable(fee_plan, snapshot.balance)

        mode = destination_for(options.reverts)
        envelope = self.builder.build(
            signer,
            nonce=snapshot.nonce,
            chain_id=snapshot.chain_id,
            fee_plan=fee_plan,
            mode=mode,
        )

        router = SubmissionRouter(
            self.executor,
            confirmation_timeout=options.confirmation_timeout,
            request_timeout=self.request_timeout,
        )
        handle = await router.submit(envelope, use_bundle=options.use_bundle)
        emit(f"Submitted {handle.label}: {handle.hash}")

        outcome = await self.watcher.watch(handle)

        logger.info(f"Run finished for {mask_address(address)}: {outcome.kind}")
        return RunReport(
            address=address,
            snapshot=snapshot,
            fee_plan=fee_plan,
            envelope=envelope,
            handle=handle,
            outcome=outcome,
        )
