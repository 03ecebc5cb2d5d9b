"""
TRANSFER EXECUTOR

Runs one lamport transfer against the ledger and reports the outcome.

RULES:
- Ledger failures are captured in the outcome, never raised
- Nothing is submitted if the blockhash cannot be fetched
- Failed transfers report zero elapsed time
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solana_fanout.domain.models import TransferOutcome, TransferRequest
from solana_fanout.infrastructure.ledger.transaction import build_transfer_transaction
from solana_fanout.infrastructure.ledger.types import LedgerService

logger = logging.getLogger(__name__)


def describe_error(exc: BaseException) -> str:
    """Exception message, or its type name when the message is empty."""
    return str(exc) or type(exc).__name__


async def execute_transfer(
    service: LedgerService,
    sender: Keypair,
    recipient: Pubkey,
    lamports: int,
    position: int = 0,
) -> TransferOutcome:
    source = str(sender.pubkey())
    destination = str(recipient)
    started = time.perf_counter()

    try:
        blockhash = await service.get_latest_blockhash()
    except Exception as exc:
        logger.warning("Transfer #%d: blockhash fetch failed: %s", position, exc)
        return TransferOutcome.failure(
            source, destination, f"could not obtain reference point: {describe_error(exc)}", position
        )

    try:
        transaction = build_transfer_transaction(sender, recipient, lamports, blockhash)
        signature = await service.send_and_confirm_transaction(transaction)
    except Exception as exc:
        logger.warning("Transfer #%d: %s -> %s failed: %s", position, source, destination, exc)
        return TransferOutcome.failure(source, destination, describe_error(exc), position)

    elapsed = timedelta(seconds=time.perf_counter() - started)
    logger.info(
        "Transfer #%d: %s -> %s confirmed as %s in %.3fs",
        position,
        source,
        destination,
        signature,
        elapsed.total_seconds(),
    )
    return TransferOutcome.success(source, destination, signature, elapsed, position)


async def execute_request(service: LedgerService, request: TransferRequest) -> TransferOutcome:
    return await execute_transfer(
        service,
        request.sender,
        request.recipient,
        request.lamports,
        request.position,
    )
