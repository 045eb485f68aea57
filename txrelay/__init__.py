"""
txrelay.

Command-line client that builds, signs and submits a single EIP-1559
transaction, either through the public mempool or as a private relay bundle,
and waits a bounded time for its inclusion.
"""

__version__ = "0.1.0"
