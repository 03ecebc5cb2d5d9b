"""
Ledger client factory (settings-driven).
"""

from __future__ import annotations

from typing import Optional

from solana_fanout.config import Settings
from solana_fanout.infrastructure.ledger.solana_rpc import SolanaRpcClient


def get_ledger_service(settings: Settings, rpc_url: Optional[str] = None) -> SolanaRpcClient:
    url = (rpc_url or settings.RPC_URL or "").strip()
    if not url:
        raise ValueError("RPC URL missing")
    return SolanaRpcClient(
        rpc_url=url,
        commitment=settings.COMMITMENT,
        timeout_seconds=settings.RPC_TIMEOUT_SECONDS,
        confirm_timeout_seconds=settings.CONFIRM_TIMEOUT_SECONDS,
        poll_interval_seconds=settings.CONFIRM_POLL_INTERVAL_SECONDS,
    )
