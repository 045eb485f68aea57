"""
Application constants.

Centralized constants for the application.
"""

# ========================================================================
# RPC ENDPOINTS
# ========================================================================

# Short names accepted by --rpc-url; anything else is used literally
RPC_URL_ALIASES: dict[str, str] = {
    "local": "http://localhost:8545",
    "uni-sepolia": "https://sepolia.unichain.org",
    "uni-experimental": "https://unichain-experimental.rpc.flashbots.net",
}

DEFAULT_RPC_URL = "local"

# Well-known development key (first account of anvil/hardhat).
# Holds no value on any public network.
DEFAULT_PRIVATE_KEY = (
    "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
)

# ========================================================================
# BLOCKCHAIN TIMEOUTS
# ========================================================================

# Hard ceiling for waiting on inclusion (in seconds)
CONFIRMATION_TIMEOUT = 20.0
CONFIRMATION_POLL_INTERVAL = 0.5  # Receipt polling interval

BLOCKCHAIN_RPC_TIMEOUT = 30  # RPC provider HTTP timeout
BLOCKCHAIN_EXECUTOR_TIMEOUT = 20.0  # Timeout for run_in_executor reads

# Worker threads for concurrent state reads (chain id, nonce, balance, block)
BLOCKCHAIN_EXECUTOR_WORKERS = 4

# ========================================================================
# PROCESS
# ========================================================================

EXIT_OK = 0
EXIT_FAILURE = 1
