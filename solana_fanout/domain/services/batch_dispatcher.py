"""
BATCH DISPATCHER

Fans a batch of transfers out as concurrent tasks and collects one outcome
per dispatched pair.

RESPONSIBILITIES:
- Pair senders with recipients and drop malformed recipients
- Spawn one task per valid pair, all sharing one ledger service
- Wait for every task before the results are read

RULES:
- A failing transfer never affects its siblings
- Only cancellation or interpreter-level faults abort the batch
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from solana_fanout.domain.models import TransferOutcome, TransferRequest
from solana_fanout.domain.services.result_set import ResultSet
from solana_fanout.domain.services.transfer_executor import describe_error, execute_request
from solana_fanout.infrastructure.ledger.keys import InvalidPubkeyError, parse_keypair, parse_pubkey
from solana_fanout.infrastructure.ledger.types import LedgerService
from solana_fanout.utils.logging_redaction import register_secret

logger = logging.getLogger(__name__)


class BatchAbortedError(RuntimeError):
    """A transfer task ended abnormally and the batch cannot be reported."""


def build_requests(
    pairs: Iterable[Tuple[str, str]],
    lamports: int,
) -> List[TransferRequest]:
    """
    Turn (sender secret, recipient address) pairs into transfer requests.

    Pairs whose recipient is not a valid address are skipped. A malformed
    sender secret raises ``InvalidKeypairError``.
    """
    requests: List[TransferRequest] = []
    for position, (sender_secret, recipient) in enumerate(pairs):
        try:
            recipient_key = parse_pubkey(recipient)
        except InvalidPubkeyError:
            logger.debug("Skipping pair #%d: invalid recipient address", position)
            continue

        register_secret(sender_secret)
        sender = parse_keypair(sender_secret)
        requests.append(
            TransferRequest(
                sender=sender,
                recipient=recipient_key,
                lamports=lamports,
                position=position,
            )
        )
    return requests


class BatchDispatcher:
    def __init__(self, service: LedgerService, max_concurrency: int = 0):
        if max_concurrency < 0:
            raise ValueError("max_concurrency must be >= 0")
        self.service = service
        self.max_concurrency = max_concurrency
        self.skipped = 0

    async def run(
        self,
        pairs: Sequence[Tuple[str, str]],
        lamports: int,
    ) -> List[TransferOutcome]:
        pairs = list(pairs)
        requests = build_requests(pairs, lamports)
        self.skipped = len(pairs) - len(requests)
        if self.skipped:
            logger.info("Skipped %d pair(s) with invalid recipient addresses", self.skipped)

        results = ResultSet()
        semaphore: Optional[asyncio.Semaphore] = None
        if self.max_concurrency:
            semaphore = asyncio.Semaphore(self.max_concurrency)

        logger.info("Dispatching %d transfer(s) of %d lamports", len(requests), lamports)
        tasks = [
            asyncio.create_task(
                self._run_one(request, results, semaphore),
                name=f"transfer-{request.position}",
            )
            for request in requests
        ]
        finished = await asyncio.gather(*tasks, return_exceptions=True)

        for request, result in zip(requests, finished):
            if isinstance(result, BaseException):
                raise BatchAbortedError(
                    f"transfer task #{request.position} did not complete: {result!r}"
                ) from result

        results.freeze()
        outcomes = results.outcomes()
        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        logger.info(
            "Batch complete: %d succeeded, %d failed",
            succeeded,
            len(outcomes) - succeeded,
        )
        return outcomes

    async def _run_one(
        self,
        request: TransferRequest,
        results: ResultSet,
        semaphore: Optional[asyncio.Semaphore],
    ) -> None:
        try:
            if semaphore is None:
                outcome = await execute_request(self.service, request)
            else:
                async with semaphore:
                    outcome = await execute_request(self.service, request)
        except Exception as exc:
            logger.exception("Transfer #%d raised unexpectedly", request.position)
            outcome = TransferOutcome.failure(
                request.source,
                request.destination,
                f"unexpected error: {describe_error(exc)}",
                request.position,
            )
        await results.append(outcome)
