"""
Domain Models Package
Export all domain entities
"""

from .transfer import (
    ZERO_ELAPSED,
    TransferOutcome,
    TransferRequest,
    TransferStatus,
)

__all__ = [
    "ZERO_ELAPSED",
    "TransferOutcome",
    "TransferRequest",
    "TransferStatus",
]
