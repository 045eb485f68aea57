"""Input validation utilities."""

import re

from eth_utils import is_address, to_checksum_address
from pydantic import HttpUrl, TypeAdapter, ValidationError

from txrelay.config.constants import RPC_URL_ALIASES
from txrelay.utils.exceptions import ConfigError, InvalidKeyError


_HTTP_URL = TypeAdapter(HttpUrl)
_PRIVATE_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def resolve_rpc_url(value: str) -> str:
    """
    Resolve an RPC alias or validate a literal endpoint URL.

    Args:
        value: Alias ("local", "uni-sepolia", "uni-experimental") or URL

    Returns:
        Endpoint URL as given (aliases expanded)

    Raises:
        ConfigError: If the value is neither an alias nor an http(s) URL
    """
    value = (value or "").strip()
    if value in RPC_URL_ALIASES:
        return RPC_URL_ALIASES[value]

    try:
        _HTTP_URL.validate_python(value)
    except ValidationError as e:
        raise ConfigError(f"Invalid RPC URL {value!r}: expected http(s) URL or alias") from e
    return value


def normalize_private_key(key: str) -> str:
    """
    Normalize private key to 0x-prefixed hex.

    Args:
        key: Private key with or without 0x prefix

    Returns:
        0x-prefixed private key

    Raises:
        InvalidKeyError: If the key is not 32 bytes of hex
    """
    key = (key or "").strip()
    if not _PRIVATE_KEY_RE.match(key):
        # Never echo the key itself
        raise InvalidKeyError("Private key must be 32 bytes of hex (64 characters)")
    if not key.startswith("0x"):
        key = "0x" + key
    return key


def validate_address(address: str) -> str:
    """
    Validate and checksum an address.

    Raises:
        ConfigError: If the address is malformed
    """
    if not address or not is_address(address):
        raise ConfigError(f"Invalid address: {address!r}")
    return to_checksum_address(address)
