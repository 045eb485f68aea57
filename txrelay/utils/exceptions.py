"""
Exception hierarchy.

Defines categorized exception types for the send pipeline. Every fatal
failure carries the pipeline step it happened in so the CLI can report
which stage broke.
"""


class TxRelayError(Exception):
    """Base exception for all fatal pipeline errors."""

    step = "run"


class ConfigError(TxRelayError):
    """Raised when user-supplied configuration is malformed."""

    step = "config"


class InvalidKeyError(ConfigError):
    """Raised when the private key cannot be parsed."""

    step = "signer"


class RemoteQueryError(TxRelayError):
    """Raised when one of the initial chain state reads fails."""

    def __init__(self, message: str, query: str = "rpc") -> None:
        super().__init__(message)
        self.query = query

    @property
    def step(self) -> str:
        return f"query:{self.query}"


class MissingBaseFeeError(RemoteQueryError):
    """Raised when the latest block does not expose baseFeePerGas."""

    def __init__(self, message: str = "Latest block has no baseFeePerGas") -> None:
        super().__init__(message, query="base_fee")


class PreconditionError(TxRelayError):
    """Raised when account state does not allow sending (zero balance)."""

    step = "balance"


class SigningError(TxRelayError):
    """Raised when the transaction cannot be signed."""

    step = "signing"


class SubmissionError(TxRelayError):
    """Raised when the single submission attempt fails."""

    def __init__(self, message: str, path: str = "broadcast") -> None:
        super().__init__(message)
        self.path = path

    @property
    def step(self) -> str:
        return f"submit:{self.path}"
