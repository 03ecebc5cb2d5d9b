"""
Solana JSON-RPC client.
Submits signed transactions and waits for them to reach the requested commitment.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from typing import Any, List, Optional

import httpx
from solders.transaction import Transaction

from solana_fanout.infrastructure.ledger.transaction import (
    transaction_signature,
    transaction_to_base64,
)
from solana_fanout.infrastructure.ledger.types import (
    LedgerRpcError,
    TransactionConfirmationError,
)

logger = logging.getLogger(__name__)

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


class SolanaRpcClient:
    def __init__(
        self,
        rpc_url: str,
        commitment: str = "confirmed",
        timeout_seconds: float = 30.0,
        confirm_timeout_seconds: float = 60.0,
        poll_interval_seconds: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if commitment not in COMMITMENT_LEVELS:
            raise ValueError(f"Unknown commitment level: {commitment}")
        self.rpc_url = rpc_url
        self.commitment = commitment
        self.confirm_timeout_seconds = confirm_timeout_seconds
        self.poll_interval_seconds = poll_interval_seconds
        self._ids = itertools.count(1)
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, method: str, params: List[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        try:
            response = await self._client.post(self.rpc_url, json=payload)
        except httpx.HTTPError as exc:
            raise LedgerRpcError(f"{method} request failed: {exc}") from exc

        if response.status_code >= 400:
            raise LedgerRpcError(f"{method} HTTP {response.status_code}: {response.text}")

        try:
            body = response.json()
        except ValueError as exc:
            raise LedgerRpcError(f"{method} returned invalid JSON") from exc
        if not isinstance(body, dict):
            raise LedgerRpcError(f"{method} returned a non-object response")

        error = body.get("error")
        if error:
            message = error.get("message", error) if isinstance(error, dict) else error
            raise LedgerRpcError(f"{method} error: {message}")
        if "result" not in body:
            raise LedgerRpcError(f"{method} response has no result")
        return body["result"]

    # ------------------------------------------------------------------
    # BLOCKHASH
    # ------------------------------------------------------------------

    async def get_latest_blockhash(self) -> str:
        result = await self._call("getLatestBlockhash", [{"commitment": self.commitment}])
        try:
            return result["value"]["blockhash"]
        except (KeyError, TypeError) as exc:
            raise LedgerRpcError("getLatestBlockhash returned an unexpected payload") from exc

    # ------------------------------------------------------------------
    # SUBMIT + CONFIRM
    # ------------------------------------------------------------------

    async def send_transaction(self, transaction: Transaction) -> str:
        signature = await self._call(
            "sendTransaction",
            [
                transaction_to_base64(transaction),
                {"encoding": "base64", "preflightCommitment": self.commitment},
            ],
        )
        if signature != transaction_signature(transaction):
            raise LedgerRpcError(f"sendTransaction returned an unexpected signature: {signature}")
        logger.debug("Submitted transaction %s", signature)
        return signature

    async def get_signature_status(self, signature: str) -> Optional[dict]:
        result = await self._call(
            "getSignatureStatuses",
            [[signature], {"searchTransactionHistory": False}],
        )
        try:
            return result["value"][0]
        except (KeyError, IndexError, TypeError) as exc:
            raise LedgerRpcError("getSignatureStatuses returned an unexpected payload") from exc

    def _reached_commitment(self, status: dict) -> bool:
        reached = status.get("confirmationStatus")
        if reached is None:
            # Nodes omit confirmationStatus once the transaction is rooted.
            return status.get("confirmations") is None
        if reached not in COMMITMENT_LEVELS:
            return False
        return COMMITMENT_LEVELS.index(reached) >= COMMITMENT_LEVELS.index(self.commitment)

    async def confirm_transaction(self, signature: str) -> None:
        deadline = time.monotonic() + self.confirm_timeout_seconds
        while True:
            status = await self.get_signature_status(signature)
            if status is not None:
                if status.get("err") is not None:
                    raise TransactionConfirmationError(
                        f"transaction {signature} failed: {status['err']}"
                    )
                if self._reached_commitment(status):
                    return
            if time.monotonic() >= deadline:
                raise TransactionConfirmationError(
                    f"transaction {signature} not confirmed within "
                    f"{self.confirm_timeout_seconds:g}s"
                )
            await asyncio.sleep(self.poll_interval_seconds)

    async def send_and_confirm_transaction(self, transaction: Transaction) -> str:
        signature = await self.send_transaction(transaction)
        await self.confirm_transaction(signature)
        return signature
