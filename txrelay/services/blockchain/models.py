"""Pydantic models for the send pipeline."""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from txrelay.services.blockchain.core_constants import (
    DEFAULT_GAS_LIMIT,
    REVERTING_INIT_CODE,
    TRANSFER_RECIPIENT,
)


FROZEN = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class ChainSnapshot(BaseModel):
    """Point-in-time view of chain and account state.

    Fetched fresh per run, never cached.
    """

    model_config = FROZEN

    chain_id: int = Field(..., ge=0, description="Chain id reported by the endpoint")
    nonce: int = Field(..., ge=0, description="Transaction count of the signer")
    balance: int = Field(..., ge=0, description="Signer balance in wei")
    base_fee: int = Field(..., ge=0, description="Latest block baseFeePerGas in wei")


class FeePlan(BaseModel):
    """EIP-1559 fee fields derived from the base fee."""

    model_config = FROZEN

    max_priority_fee_per_gas: int = Field(..., ge=0)
    max_fee_per_gas: int = Field(..., ge=0)


class Transfer(BaseModel):
    """Plain transfer to the fixed recipient with empty calldata."""

    model_config = FROZEN

    kind: Literal["transfer"] = "transfer"
    recipient: str = TRANSFER_RECIPIENT

    @property
    def to(self) -> str | None:
        return self.recipient

    @property
    def data(self) -> bytes:
        return b""


class RevertingCall(BaseModel):
    """Contract creation whose init code unconditionally reverts."""

    model_config = FROZEN

    kind: Literal["reverting_call"] = "reverting_call"
    payload: bytes = REVERTING_INIT_CODE

    @property
    def to(self) -> str | None:
        return None

    @property
    def data(self) -> bytes:
        return self.payload


DestinationMode = Annotated[Transfer | RevertingCall, Field(discriminator="kind")]


def destination_for(reverts: bool) -> Transfer | RevertingCall:
    """Pick the destination mode selected by the --reverts flag."""
    return RevertingCall() if reverts else Transfer()


class TransactionIntent(BaseModel):
    """Fully populated, unsigned transaction."""

    model_config = FROZEN

    chain_id: int = Field(..., ge=0)
    nonce: int = Field(..., ge=0)
    fee_plan: FeePlan
    mode: DestinationMode
    gas_limit: int = Field(default=DEFAULT_GAS_LIMIT, gt=0)
    value: int = Field(default=0, ge=0)


class SignedEnvelope(BaseModel):
    """Signed EIP-2718 envelope ready for transmission."""

    model_config = FROZEN

    raw: bytes = Field(..., repr=False)
    tx_hash: str = Field(..., description="0x-prefixed keccak256 of raw")
    intent: TransactionIntent

    @property
    def raw_hex(self) -> str:
        return "0x" + self.raw.hex()


class Bundle(BaseModel):
    """Relay bundle request: ordered envelopes and optional block bound."""

    model_config = FROZEN

    txs: tuple[bytes, ...] = Field(..., min_length=1)
    max_block_number: int | None = Field(default=None, ge=0)

    def to_rpc(self) -> dict:
        """
        Encode bundle as eth_sendBundle params object.

        Returns:
            Dict with hex-encoded txs and, when set, hex maxBlockNumber
        """
        params: dict = {"txs": ["0x" + tx.hex() for tx in self.txs]}
        if self.max_block_number is not None:
            params["maxBlockNumber"] = hex(self.max_block_number)
        return params


class BundleResult(BaseModel):
    """Relay reply to eth_sendBundle."""

    model_config = FROZEN

    bundle_hash: str = Field(..., min_length=1)

    @classmethod
    def from_rpc(cls, result) -> "BundleResult":
        """Parse {"bundleHash": ...} relay response."""
        if not hasattr(result, "get"):
            raise ValueError(f"Unexpected eth_sendBundle result: {result!r}")
        bundle_hash = result.get("bundleHash")
        if not bundle_hash:
            raise ValueError(f"eth_sendBundle result has no bundleHash: {result!r}")
        if isinstance(bundle_hash, bytes):
            bundle_hash = "0x" + bundle_hash.hex()
        return cls(bundle_hash=str(bundle_hash))


class SubmissionKind(str, Enum):
    """Delivery path used for the envelope."""

    TRANSACTION = "transaction"
    BUNDLE = "bundle"


class SubmissionHandle(BaseModel):
    """Pending reference returned by either submission path.

    `hash` is what the watcher polls: the broadcast transaction hash or the
    relay's bundle hash. `tx_hash` always records the envelope hash.
    """

    model_config = FROZEN

    kind: SubmissionKind
    hash: str = Field(..., min_length=1)
    timeout: float = Field(..., gt=0)
    tx_hash: str

    @property
    def label(self) -> str:
        return self.kind.value


class Confirmed(BaseModel):
    """Inclusion observed."""

    model_config = FROZEN

    kind: Literal["confirmed"] = "confirmed"
    final_hash: str
    block_number: int | None = None
    status: int | None = None

    @property
    def reverted(self) -> bool:
        return self.status == 0


class TimedOut(BaseModel):
    """No inclusion observed within the timeout."""

    model_config = FROZEN

    kind: Literal["timed_out"] = "timed_out"
    hash: str
    timeout: float


class WatchError(BaseModel):
    """Remote endpoint failed while polling."""

    model_config = FROZEN

    kind: Literal["watch_error"] = "watch_error"
    hash: str
    cause: str


WatchOutcome = Annotated[Confirmed | TimedOut | WatchError, Field(discriminator="kind")]


class RunOptions(BaseModel):
    """Per-run inputs for the pipeline."""

    model_config = FROZEN

    reverts: bool = False
    use_bundle: bool = False
    confirmation_timeout: float = Field(..., gt=0)


class RunReport(BaseModel):
    """Everything the CLI prints about a completed run."""

    model_config = FROZEN

    address: str
    snapshot: ChainSnapshot
    fee_plan: FeePlan
    envelope: SignedEnvelope
    handle: SubmissionHandle
    outcome: WatchOutcome

    @model_validator(mode="after")
    def check_handle_matches_envelope(self) -> "RunReport":
        if self.handle.tx_hash != self.envelope.tx_hash:
            raise ValueError("Submission handle does not belong to the envelope")
        return self
