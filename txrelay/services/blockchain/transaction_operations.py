"""
Transaction operations for the send pipeline.

This module handles:
- Assembling the EIP-1559 transaction from fee plan, nonce and chain id
- Destination selection (transfer vs. reverting contract creation)
- Signing into an EIP-2718 envelope
"""

from typing import Any

from loguru import logger
from web3 import Web3

from txrelay.utils.exceptions import SigningError
from txrelay.utils.validation import validate_address

from .core_constants import DEFAULT_GAS_LIMIT, DYNAMIC_FEE_TX_TYPE
from .models import (
    FeePlan,
    RevertingCall,
    SignedEnvelope,
    TransactionIntent,
    Transfer,
)
from .wallet_operations import Signer


def intent_to_tx_dict(intent: TransactionIntent) -> dict[str, Any]:
    """
    Convert intent to eth-account transaction fields.

    A missing "to" key means contract creation.

    Args:
        intent: Unsigned transaction

    Returns:
        Transaction dict accepted by Account.sign_transaction
    """
    txn: dict[str, Any] = {
        "type": DYNAMIC_FEE_TX_TYPE,
        "chainId": intent.chain_id,
        "nonce": intent.nonce,
        "gas": intent.gas_limit,
        "maxFeePerGas": intent.fee_plan.max_fee_per_gas,
        "maxPriorityFeePerGas": intent.fee_plan.max_priority_fee_per_gas,
        "value": intent.value,
        "data": intent.mode.data,
        "accessList": [],
    }
    if intent.mode.to is not None:
        txn["to"] = validate_address(intent.mode.to)
    return txn


class TransactionBuilder:
    """
    Builds and signs the single transaction of a run.
    """

    def __init__(self, gas_limit: int = DEFAULT_GAS_LIMIT) -> None:
        """
        Initialize transaction builder.

        Args:
            gas_limit: Fixed gas limit for every transaction
        """
        self.gas_limit = gas_limit

    def build(
        self,
        signer: Signer,
        nonce: int,
        chain_id: int,
        fee_plan: FeePlan,
        mode: Transfer | RevertingCall,
    ) -> SignedEnvelope:
        """
        Build and sign a transaction.

        Args:
            signer: Signer holding the sender key
            nonce: Sender nonce
            chain_id: Chain id to bind the signature to
            fee_plan: Fee fields
            mode: Transfer or RevertingCall

        Returns:
            SignedEnvelope with raw bytes and transaction hash

        Raises:
            SigningError: If signing fails
        """
        intent = TransactionIntent(
            chain_id=chain_id,
            nonce=nonce,
            fee_plan=fee_plan,
            mode=mode,
            gas_limit=self.gas_limit,
        )
        txn = intent_to_tx_dict(intent)

        logger.info(
            f"Signing {mode.kind} tx: nonce={nonce}, chain_id={chain_id}, "
            f"gas_limit={self.gas_limit}, "
            f"max_fee={fee_plan.max_fee_per_gas} wei, "
            f"tip={fee_plan.max_priority_fee_per_gas} wei"
        )

        signed = signer.sign(txn)
        raw = bytes(signed.raw_transaction)
        if not raw or raw[0] != DYNAMIC_FEE_TX_TYPE:
            raise SigningError("Signed transaction is not a type-2 envelope")

        envelope = SignedEnvelope(
            raw=raw,
            tx_hash=Web3.to_hex(signed.hash),
            intent=intent,
        )
        logger.debug(f"Envelope built: {len(raw)} bytes, hash {envelope.tx_hash}")
        return envelope
