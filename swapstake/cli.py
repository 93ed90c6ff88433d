"""Command-line entry point.

Usage:
    swapstake 1 0.5 1                 # swap 1 USDC, stake 0.5 LINK in pool 1
    swapstake 1 0.5 1 --env-file .env.sepolia

Reads RPC_URL and PRIVATE_KEY (plus optional SWAPSTAKE_* overrides) from the
environment after loading the given ``.env`` file.
"""

from __future__ import annotations

import argparse
import decimal
from decimal import Decimal
from pathlib import Path

import structlog
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from swapstake.chain.client import ChainClient
from swapstake.chain.signer import SigningIdentity
from swapstake.config import RuntimeSettings, load_workflow_config
from swapstake.models.request import WorkflowRequest
from swapstake.workflow import SwapStakeWorkflow

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except decimal.InvalidOperation as err:
        raise argparse.ArgumentTypeError(f"not a decimal number: {value!r}") from err


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swapstake",
        description="Swap the input token through a V3 pool, then stake the output",
    )
    parser.add_argument("swap_amount", type=_decimal_arg, help="Input token amount to swap")
    parser.add_argument("stake_amount", type=_decimal_arg, help="Token amount to stake")
    parser.add_argument("pool_id", type=int, help="Pool slot id in the staking contract")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help=(
            "Path to a .env file (default: ./.env if present). "
            "Values in the file take precedence over exported variables"
        ),
    )
    return parser


def configure_logging() -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ]
    )


def main(argv: list[str] | None = None) -> int:
    """Run one swap-and-stake workflow and return the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.env_file is not None:
        if not args.env_file.exists():
            logger.error("env_file_missing", path=str(args.env_file))
            return EXIT_CONFIG_ERROR
        env_file = args.env_file
    else:
        env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file, override=True)

    try:
        request = WorkflowRequest(
            swap_amount=args.swap_amount,
            stake_amount=args.stake_amount,
            pool_id=args.pool_id,
        )
        settings = RuntimeSettings.from_env()
        config = load_workflow_config()
        signer = SigningIdentity(settings.private_key)
        client = ChainClient.connect(settings.rpc_url, signer, config)
    except (ValidationError, ValueError, ConnectionError) as e:
        logger.error("configuration_error", error=str(e))
        return EXIT_CONFIG_ERROR

    outcome = SwapStakeWorkflow.from_client(client, config).run(request)
    if not outcome.succeeded:
        return EXIT_FAILED
    for step, tx_hash in outcome.tx_hashes.items():
        print(f"{step.value}: {client.explorer_tx_url(tx_hash)}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
