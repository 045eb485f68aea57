#!/usr/bin/env python3
"""
Send a single transaction, publicly or as a relay bundle.

Usage:
    txrelay --rpc-url local                      # plain transfer
    txrelay --rpc-url uni-sepolia --reverts      # reverting contract creation
    txrelay --rpc-url https://... --bundle       # submit through eth_sendBundle

The private key defaults to PRIVATE_KEY from the environment (or .env) and
then to the well-known local development key.
"""

import argparse
import asyncio
import sys

from loguru import logger
from pydantic import ValidationError

from txrelay import __version__
from txrelay.config.constants import EXIT_FAILURE, EXIT_OK
from txrelay.config.settings import Settings, get_settings
from txrelay.logging_setup import setup_logging
from txrelay.services.blockchain.async_executor import AsyncBlockchainExecutor
from txrelay.services.blockchain.models import (
    Confirmed,
    RunOptions,
    RunReport,
    TimedOut,
    WatchError,
)
from txrelay.services.blockchain.service_facade import TransactionPipeline, create_web3
from txrelay.services.blockchain.wallet_operations import Signer
from txrelay.utils.exceptions import ConfigError, TxRelayError
from txrelay.utils.validation import resolve_rpc_url


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="txrelay",
        description="Build, sign and submit a transaction, optionally as a relay bundle",
    )
    parser.add_argument(
        "--private-key",
        default=None,
        help="Private key for signing transactions (default: PRIVATE_KEY or dev key)",
    )
    parser.add_argument(
        "--rpc-url",
        default=None,
        help="RPC URL or alias: local, uni-sepolia, uni-experimental (default: local)",
    )
    parser.add_argument(
        "--reverts",
        action="store_true",
        help="Send a contract creation that always reverts instead of a transfer",
    )
    parser.add_argument(
        "--bundle",
        action="store_true",
        help="Submit through eth_sendBundle instead of the public pool",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for inclusion (default: 20)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Diagnostics level on stderr (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """
    Merge CLI flags over environment settings.

    Raises:
        ConfigError: If a value fails validation
    """
    try:
        return get_settings(
            private_key=args.private_key,
            rpc_url=args.rpc_url,
            confirmation_timeout=args.timeout,
            log_level=args.log_level,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        # Validation messages may quote input values; keep the key out of output
        raise ConfigError(f"Invalid configuration: {fields}") from e


def format_outcome(report: RunReport) -> str:
    """Render the watch outcome as one line."""
    outcome = report.outcome
    handle = report.handle
    if isinstance(outcome, Confirmed):
        line = f"Transaction mined: {outcome.final_hash}"
        if outcome.block_number is not None:
            line += f" (block {outcome.block_number})"
        if outcome.reverted:
            line += " [reverted]"
        return line
    if isinstance(outcome, TimedOut):
        return f"Timed out after {outcome.timeout:g}s waiting for {handle.label} {outcome.hash}"
    if isinstance(outcome, WatchError):
        return f"Error while waiting for {handle.label} {outcome.hash}: {outcome.cause}"
    raise TypeError(f"Unknown watch outcome: {outcome!r}")


async def send(
    signer: Signer,
    rpc_url: str,
    options: RunOptions,
    settings: Settings,
) -> RunReport:
    """Connect to the endpoint and run the pipeline once."""
    w3 = create_web3(rpc_url, request_timeout=settings.rpc_request_timeout)
    async with AsyncBlockchainExecutor(w3) as executor:
        pipeline = TransactionPipeline(
            executor,
            poll_interval=settings.poll_interval,
            request_timeout=settings.rpc_request_timeout,
        )
        return await pipeline.run(signer, options, progress=print)


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit code: 0 on success or non-fatal watch outcome, 1 on error
    """
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        settings = load_settings(args)
        setup_logging(settings.log_level)

        signer = Signer.from_key(settings.private_key)
        print(f"Address of the signer: {signer.address}")

        rpc_url = resolve_rpc_url(settings.rpc_url)
        options = RunOptions(
            reverts=args.reverts,
            use_bundle=args.bundle,
            confirmation_timeout=settings.confirmation_timeout,
        )
        print(f"Revert mode: {'on' if options.reverts else 'off'}")
        print(f"Bundle mode: {'on' if options.use_bundle else 'off'}")

        report = asyncio.run(send(signer, rpc_url, options, settings))
    except TxRelayError as e:
        logger.debug(f"Run aborted at step {e.step}: {e!r}")
        print(f"Error [{e.step}]: {e}")
        return EXIT_FAILURE

    print(format_outcome(report))
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
