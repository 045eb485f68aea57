"""
Core blockchain constants and configurations.

This module contains all transaction-related constants including:
- Gas limit and fee policy parameters
- Fixed destinations and payloads
- RPC method names
"""

# Gas limit used for every transaction (no estimation)
DEFAULT_GAS_LIMIT = 300_000

# Fee policy
# 2 Gwei = 2_000_000_000 Wei (1 Gwei = 10^9 Wei)
MIN_PRIORITY_FEE_WEI = 2_000_000_000
PRIORITY_FEE_BASE_FEE_DIVISOR = 10  # Tip is at least 10% of base fee
MAX_FEE_BUFFER_DIVISOR = 4  # Max fee leaves 25% headroom over base fee

# EIP-1559 dynamic fee transaction (EIP-2718 type 0x02)
DYNAMIC_FEE_TX_TYPE = 2

# Transfer destination (vitalik.eth)
TRANSFER_RECIPIENT = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"

# Contract-creation init code that always reverts:
# PUSH1 0x00 PUSH1 0x00 REVERT
REVERTING_INIT_CODE = bytes.fromhex("60006000fd")

# Relay RPC
SEND_BUNDLE_METHOD = "eth_sendBundle"
