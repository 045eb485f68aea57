"""
Async executor for blockchain operations.

Provides async execution of synchronous Web3 operations in a thread pool
with a per-call timeout. There is no retry and no failover: every call is a
single attempt against a single endpoint.
"""

import asyncio
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from loguru import logger
from web3 import Web3

from txrelay.config.constants import (
    BLOCKCHAIN_EXECUTOR_TIMEOUT,
    BLOCKCHAIN_EXECUTOR_WORKERS,
)


class AsyncBlockchainExecutor:
    """
    Async executor for blockchain operations.

    Handles:
    - Thread pool execution of sync Web3 calls
    - Daemon-thread execution of long waits
    - Timeout handling
    """

    def __init__(
        self,
        w3: Web3,
        max_workers: int = BLOCKCHAIN_EXECUTOR_WORKERS,
    ) -> None:
        """
        Initialize async executor.

        Args:
            w3: Web3 instance connected to the endpoint
            max_workers: Maximum thread pool workers
        """
        self.w3 = w3
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="web3"
        )

    async def run(
        self,
        sync_func: Callable[[Web3], Any],
        timeout: float = BLOCKCHAIN_EXECUTOR_TIMEOUT,
        operation_name: str = "RPC call",
    ) -> Any:
        """
        Run a synchronous Web3 function in the thread pool.

        Args:
            sync_func: Synchronous function that takes Web3 instance as argument
            timeout: Timeout in seconds
            operation_name: Operation name for logging

        Returns:
            Result from the function

        Raises:
            TimeoutError: If the call does not finish within timeout
        """
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(
                    self._executor,
                    lambda: sync_func(self.w3)
                ),
                timeout=timeout,
            )
        except TimeoutError:
            logger.error(f"{operation_name} timed out after {timeout}s")
            raise TimeoutError(f"{operation_name} timed out after {timeout}s")

    async def run_detached(
        self,
        sync_func: Callable[[Web3], Any],
        timeout: float,
        operation_name: str = "RPC call",
    ) -> Any:
        """
        Run a long blocking Web3 function on its own daemon thread.

        Pool workers are joined at interpreter exit, daemon threads are not,
        so a call abandoned on timeout cannot keep the process alive.

        Args:
            sync_func: Synchronous function that takes Web3 instance as argument
            timeout: Timeout in seconds
            operation_name: Operation name for logging

        Returns:
            Result from the function

        Raises:
            TimeoutError: If the call does not finish within timeout
        """
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def _deliver(setter: Callable[[Any], None], value: Any) -> None:
            if not future.done():
                setter(value)

        def _target() -> None:
            try:
                result = sync_func(self.w3)
            except Exception as e:
                callback = (_deliver, future.set_exception, e)
            else:
                callback = (_deliver, future.set_result, result)
            try:
                loop.call_soon_threadsafe(*callback)
            except RuntimeError:
                # Loop closed after the caller gave up
                logger.debug(f"{operation_name} finished after its caller returned")

        threading.Thread(target=_target, name="web3-detached", daemon=True).start()
        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except TimeoutError:
            logger.error(f"{operation_name} timed out after {timeout}s")
            raise TimeoutError(f"{operation_name} timed out after {timeout}s")

    def cleanup(self) -> None:
        """Shut down thread pool without waiting for abandoned calls."""
        if self._executor:
            self._executor.shutdown(wait=False, cancel_futures=True)

    async def __aenter__(self) -> "AsyncBlockchainExecutor":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.cleanup()
