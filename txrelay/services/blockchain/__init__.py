"""
Blockchain services module.

Provides the send pipeline and the specialized managers it delegates to.
"""

from .async_executor import AsyncBlockchainExecutor
from .confirmation_operations import ConfirmationWatcher
from .gas_operations import GasManager, derive_fee_plan
from .service_facade import TransactionPipeline, create_web3
from .state_operations import ChainStateReader
from .submission_operations import SubmissionRouter
from .transaction_operations import TransactionBuilder
from .wallet_operations import Signer


__all__ = [
    "AsyncBlockchainExecutor",
    "ChainStateReader",
    "ConfirmationWatcher",
    "GasManager",
    "Signer",
    "SubmissionRouter",
    "TransactionBuilder",
    "TransactionPipeline",
    "create_web3",
    "derive_fee_plan",
]
