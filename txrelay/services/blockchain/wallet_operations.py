"""
Wallet operations for the send pipeline.

This module handles:
- Signer initialization from a user-supplied private key
- Address derivation
- Transaction signing
"""

from typing import Any

from eth_account import Account
from eth_account.datastructures import SignedTransaction
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address
from loguru import logger

from txrelay.utils.exceptions import InvalidKeyError, SigningError
from txrelay.utils.security import mask_address
from txrelay.utils.validation import normalize_private_key


class Signer:
    """
    Holds a local signing key for the lifetime of one run.

    The key lives only in memory and is never logged or persisted.
    """

    __slots__ = ("_account", "_address")

    def __init__(self, account: LocalAccount) -> None:
        """
        Initialize signer.

        Args:
            account: eth-account local account holding the key
        """
        self._account = account
        self._address = to_checksum_address(account.address)

    @classmethod
    def from_key(cls, private_key: str) -> "Signer":
        """
        Parse a private key into a signer.

        Args:
            private_key: Hex private key with or without 0x prefix

        Returns:
            Signer instance

        Raises:
            InvalidKeyError: If the key is malformed or out of curve range
        """
        key = normalize_private_key(private_key)
        try:
            account = Account.from_key(key)
        except Exception as e:
            # eth-keys rejects zero and keys above the curve order
            raise InvalidKeyError(f"Private key is not a valid secp256k1 key: {type(e).__name__}") from e

        signer = cls(account)
        logger.info(f"Signer initialized: {mask_address(signer.address)}")
        return signer

    @property
    def address(self) -> str:
        """Checksummed address derived from the key."""
        return self._address

    def sign(self, tx: dict[str, Any]) -> SignedTransaction:
        """
        Sign a transaction dict.

        Args:
            tx: Transaction fields in eth-account format

        Returns:
            Signed transaction with raw_transaction and hash

        Raises:
            SigningError: If eth-account rejects the transaction
        """
        if "from" in tx and to_checksum_address(tx["from"]) != self._address:
            raise SigningError(
                f"Transaction sender {mask_address(tx['from'])} does not match "
                f"signer {mask_address(self._address)}"
            )
        try:
            return self._account.sign_transaction(tx)
        except Exception as e:
            logger.error(f"Failed to sign transaction: {e}")
            raise SigningError(f"Failed to sign transaction: {e}") from e

    def __repr__(self) -> str:
        return f"Signer(address={self._address!r})"
