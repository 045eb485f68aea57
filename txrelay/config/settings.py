"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
Command-line flags take precedence over anything loaded here.
"""

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from txrelay.config.constants import (
    BLOCKCHAIN_RPC_TIMEOUT,
    CONFIRMATION_POLL_INTERVAL,
    CONFIRMATION_TIMEOUT,
    DEFAULT_PRIVATE_KEY,
    DEFAULT_RPC_URL,
)
from txrelay.utils.security import mask_sensitive


LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Wallet
    private_key: str = Field(
        default=DEFAULT_PRIVATE_KEY,
        repr=False,
        description="Hex private key used to sign the transaction",
    )

    # Blockchain RPC
    rpc_url: str = Field(
        default=DEFAULT_RPC_URL,
        description="RPC endpoint URL or one of the known aliases",
    )
    rpc_request_timeout: int = Field(
        default=BLOCKCHAIN_RPC_TIMEOUT,
        gt=0,
        description="HTTP timeout for a single RPC request in seconds",
    )

    # Confirmation tracking
    confirmation_timeout: float = Field(
        default=CONFIRMATION_TIMEOUT,
        gt=0,
        description="Hard ceiling for waiting on inclusion in seconds",
    )
    poll_interval: float = Field(
        default=CONFIRMATION_POLL_INTERVAL,
        gt=0,
        description="Receipt polling interval in seconds",
    )

    # Application
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level against loguru's built-in levels."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {v!r}"
            )
        return level

    @field_validator("rpc_url", "private_key")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip surrounding whitespace copied along with secrets or URLs."""
        return v.strip()


def get_settings(**overrides) -> Settings:
    """
    Build settings from the environment with explicit overrides.

    Overrides with a value of None are ignored so that unset CLI flags
    fall back to the environment.

    Args:
        **overrides: Field values taking precedence over the environment

    Returns:
        Settings instance
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    settings = Settings(**values)
    logger.debug(
        f"Settings loaded: rpc_url={mask_sensitive(settings.rpc_url, show_chars=12)}, "
        f"confirmation_timeout={settings.confirmation_timeout}s"
    )
    return settings
