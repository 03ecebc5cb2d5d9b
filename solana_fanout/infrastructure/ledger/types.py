"""
Ledger service protocol for type hints.
"""

from __future__ import annotations

from typing import Protocol

from solders.transaction import Transaction


class LedgerRpcError(Exception):
    """Transport, HTTP or JSON-RPC level failure talking to the ledger."""


class TransactionConfirmationError(Exception):
    """A submitted transaction failed on chain or was never confirmed."""


class LedgerService(Protocol):
    async def get_latest_blockhash(self) -> str:
        ...

    async def send_and_confirm_transaction(self, transaction: Transaction) -> str:
        ...
