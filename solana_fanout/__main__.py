#!/usr/bin/env python3
"""
Send the same lamport amount from every sender wallet to its paired recipient.

Usage:
  python -m solana_fanout --config-path config/wallets.yml --lamports 5000
  python -m solana_fanout -c config/wallets.yml -l 5000 --rpc-url http://127.0.0.1:8899
  python -m solana_fanout -c config/wallets.yml -l 5000 --format json --max-concurrency 8
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from solana_fanout.config import Settings
from solana_fanout.core.logging import setup_logging
from solana_fanout.domain.models import TransferOutcome
from solana_fanout.domain.services.batch_dispatcher import BatchAbortedError, BatchDispatcher
from solana_fanout.domain.services.config_engine import WalletConfigError, load_wallet_config
from solana_fanout.infrastructure.ledger.client_factory import get_ledger_service
from solana_fanout.infrastructure.ledger.keys import InvalidKeypairError
from solana_fanout.infrastructure.ledger.transaction import MAX_LAMPORTS
from solana_fanout.infrastructure.ledger.types import LedgerService
from solana_fanout.reports.batch_report import render

logger = logging.getLogger("solana_fanout")


def lamports_type(value: str) -> int:
    try:
        amount = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from exc
    if amount < 0 or amount > MAX_LAMPORTS:
        raise argparse.ArgumentTypeError("lamports must fit in an unsigned 64-bit integer")
    return amount


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="solana-fanout",
        description="Send lamports from many wallets concurrently.",
    )
    parser.add_argument("-c", "--config-path", required=True, help="Path to the wallets YAML file")
    parser.add_argument("-l", "--lamports", required=True, type=lamports_type, help="Lamports per transfer")
    parser.add_argument("--rpc-url", default="", help="Override RPC_URL")
    parser.add_argument(
        "--max-concurrency",
        type=int,
        default=None,
        help="Cap on in-flight transfers (default: MAX_CONCURRENCY, 0 = no cap)",
    )
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Report format")
    return parser.parse_args(argv)


async def run_batch(
    service: LedgerService,
    config_path: Path,
    lamports: int,
    max_concurrency: int = 0,
) -> List[TransferOutcome]:
    wallet_config = load_wallet_config(config_path)
    dispatcher = BatchDispatcher(service, max_concurrency=max_concurrency)
    return await dispatcher.run(wallet_config.pairs(), lamports)


async def _run(args: argparse.Namespace, settings: Settings) -> List[TransferOutcome]:
    max_concurrency = settings.MAX_CONCURRENCY if args.max_concurrency is None else args.max_concurrency
    async with get_ledger_service(settings, rpc_url=args.rpc_url or None) as service:
        return await run_batch(service, Path(args.config_path), args.lamports, max_concurrency)


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    args = parse_args(argv)
    try:
        settings = settings or Settings()
    except ValidationError as exc:
        print(f"ERROR: invalid settings: {exc}", file=sys.stderr)
        return 1
    setup_logging(settings.LOG_LEVEL)

    if args.max_concurrency is not None and args.max_concurrency < 0:
        print("ERROR: --max-concurrency must be >= 0", file=sys.stderr)
        return 1

    try:
        outcomes = asyncio.run(_run(args, settings))
    except (WalletConfigError, InvalidKeypairError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except BatchAbortedError as exc:
        logger.error("Batch aborted: %s", exc)
        print(f"ERROR: batch aborted: {exc}", file=sys.stderr)
        return 1

    report = render(outcomes, args.format)
    if report:
        print(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
