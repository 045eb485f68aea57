"""
Chain state operations.

This module handles:
- Chain id lookup
- Nonce (transaction count) lookup
- Native balance lookup
- Latest block base fee lookup

Each read is a single round-trip with no retry; failures surface as
RemoteQueryError.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from eth_utils import to_checksum_address
from loguru import logger
from web3 import Web3
from web3.exceptions import Web3Exception

from txrelay.config.constants import BLOCKCHAIN_EXECUTOR_TIMEOUT
from txrelay.utils.exceptions import MissingBaseFeeError, RemoteQueryError
from txrelay.utils.security import mask_address

from .async_executor import AsyncBlockchainExecutor
from .models import ChainSnapshot


# Transport errors (requests raises OSError subclasses), RPC errors and
# malformed replies
REMOTE_ERRORS = (Web3Exception, OSError, ValueError)


class ChainStateReader:
    """
    Reads the chain and account state needed to build a transaction.
    """

    def __init__(
        self,
        executor: AsyncBlockchainExecutor,
        timeout: float = BLOCKCHAIN_EXECUTOR_TIMEOUT,
    ) -> None:
        """
        Initialize chain state reader.

        Args:
            executor: Async executor bound to the endpoint
            timeout: Timeout per read in seconds
        """
        self.executor = executor
        self.timeout = timeout

    async def _query(self, query: str, sync_func: Callable[[Web3], Any]) -> Any:
        try:
            return await self.executor.run(
                sync_func, timeout=self.timeout, operation_name=f"eth {query}"
            )
        except (TimeoutError, *REMOTE_ERRORS) as e:
            logger.error(f"Failed to fetch {query}: {e}")
            raise RemoteQueryError(f"Failed to fetch {query}: {e}", query=query) from e

    async def get_chain_id(self) -> int:
        """Get chain id of the connected endpoint."""
        return int(await self._query("chain_id", lambda w3: w3.eth.chain_id))

    async def get_nonce(self, address: str) -> int:
        """
        Get transaction count of address at the latest block.

        Args:
            address: Account address

        Returns:
            Next nonce to use
        """
        address = to_checksum_address(address)
        return int(
            await self._query("nonce", lambda w3: w3.eth.get_transaction_count(address))
        )

    async def get_balance(self, address: str) -> int:
        """
        Get native balance of address in wei.

        Args:
            address: Account address

        Returns:
            Balance in wei
        """
        address = to_checksum_address(address)
        return int(await self._query("balance", lambda w3: w3.eth.get_balance(address)))

    async def get_base_fee(self) -> int:
        """
        Get baseFeePerGas of the latest block.

        Returns:
            Base fee in wei

        Raises:
            MissingBaseFeeError: If the block predates EIP-1559 or omits the field
        """
        def _base_fee(w3: Web3) -> int:
            block = w3.eth.get_block("latest")
            base_fee = block.get("baseFeePerGas") if block else None
            if base_fee is None:
                raise MissingBaseFeeError()
            return int(base_fee)

        return await self._query("base_fee", _base_fee)

    async def fetch_snapshot(self, address: str) -> ChainSnapshot:
        """
        Fetch chain id, nonce, balance and base fee concurrently.

        All four reads must succeed; the first failure is raised.

        Args:
            address: Signer address

        Returns:
            ChainSnapshot
        """
        chain_id, nonce, balance, base_fee = await asyncio.gather(
            self.get_chain_id(),
            self.get_nonce(address),
            self.get_balance(address),
            self.get_base_fee(),
        )
        snapshot = ChainSnapshot(
            chain_id=chain_id,
            nonce=nonce,
            balance=balance,
            base_fee=base_fee,
        )
        logger.info(
            f"Chain state for {mask_address(address)}: chain_id={chain_id}, "
            f"nonce={nonce}, balance={balance / 1e18:.6f} ETH, "
            f"base_fee={base_fee / 1e9:.4f} Gwei"
        )
        return snapshot
