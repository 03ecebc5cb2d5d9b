"""
DOMAIN MODELS - TRANSFERS

Immutable structures describing one transfer request and its outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

ZERO_ELAPSED = timedelta(0)


class TransferStatus(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


@dataclass(frozen=True)
class TransferRequest:
    """
    One (sender, recipient) pair ready to be executed.
    """
    sender: Keypair = field(repr=False)
    recipient: Pubkey
    lamports: int
    position: int = 0

    @property
    def source(self) -> str:
        return str(self.sender.pubkey())

    @property
    def destination(self) -> str:
        return str(self.recipient)


@dataclass(frozen=True)
class TransferOutcome:
    """
    Terminal result of one dispatched transfer.

    ``signature`` is set if and only if ``status`` is SUCCESS, and ``reason``
    if and only if it is FAILED. Use the ``success`` / ``failure``
    constructors rather than building instances directly.
    """
    source: str
    destination: str
    status: TransferStatus
    elapsed: timedelta
    signature: Optional[str] = None
    reason: Optional[str] = None
    position: int = 0

    def __post_init__(self):
        if (self.status is TransferStatus.SUCCESS) != (self.signature is not None):
            raise ValueError("signature must be present exactly when the transfer succeeded")
        if (self.status is TransferStatus.FAILED) != (self.reason is not None):
            raise ValueError("reason must be present exactly when the transfer failed")

    @classmethod
    def success(
        cls,
        source: str,
        destination: str,
        signature: str,
        elapsed: timedelta,
        position: int = 0,
    ) -> "TransferOutcome":
        return cls(
            source=source,
            destination=destination,
            status=TransferStatus.SUCCESS,
            elapsed=elapsed,
            signature=signature,
            position=position,
        )

    @classmethod
    def failure(
        cls,
        source: str,
        destination: str,
        reason: str,
        position: int = 0,
    ) -> "TransferOutcome":
        return cls(
            source=source,
            destination=destination,
            status=TransferStatus.FAILED,
            elapsed=ZERO_ELAPSED,
            reason=reason,
            position=position,
        )

    @property
    def succeeded(self) -> bool:
        return self.status is TransferStatus.SUCCESS

    @property
    def status_text(self) -> str:
        if self.succeeded:
            return TransferStatus.SUCCESS.value
        return f"{TransferStatus.FAILED.value}: {self.reason}"
