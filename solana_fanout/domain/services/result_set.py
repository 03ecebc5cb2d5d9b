"""
Append-only collection of transfer outcomes shared by every task of a batch.
"""

from __future__ import annotations

import asyncio
from typing import List

from solana_fanout.domain.models import TransferOutcome


class ResultSetNotFrozenError(RuntimeError):
    """Raised when outcomes are read before every task has joined."""


class ResultSetFrozenError(RuntimeError):
    """Raised when an outcome is appended after the batch completed."""


class ResultSet:
    def __init__(self):
        self._outcomes: List[TransferOutcome] = []
        self._lock = asyncio.Lock()
        self._frozen = False

    async def append(self, outcome: TransferOutcome) -> None:
        # Held only for the append, never across a ledger call.
        async with self._lock:
            if self._frozen:
                raise ResultSetFrozenError("result set is frozen")
            self._outcomes.append(outcome)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def outcomes(self) -> List[TransferOutcome]:
        """Snapshot ordered by input position. Valid only after ``freeze``."""
        if not self._frozen:
            raise ResultSetNotFrozenError("result set read before all tasks joined")
        return sorted(self._outcomes, key=lambda outcome: outcome.position)

    def __len__(self) -> int:
        return len(self._outcomes)
