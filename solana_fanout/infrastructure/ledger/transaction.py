"""
System-program transfer transactions.
"""

from __future__ import annotations

import base64

from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

MAX_LAMPORTS = 2**64 - 1


def build_transfer_transaction(
    sender: Keypair,
    recipient: Pubkey,
    lamports: int,
    recent_blockhash: str,
) -> Transaction:
    """Build a transfer paid for and signed by ``sender`` alone."""
    if lamports < 0 or lamports > MAX_LAMPORTS:
        raise ValueError(f"lamports out of u64 range: {lamports}")
    instruction = transfer(
        TransferParams(from_pubkey=sender.pubkey(), to_pubkey=recipient, lamports=lamports)
    )
    message = Message([instruction], sender.pubkey())
    return Transaction([sender], message, Hash.from_string(recent_blockhash))


def transaction_signature(transaction: Transaction) -> str:
    return str(transaction.signatures[0])


def transaction_to_base64(transaction: Transaction) -> str:
    return base64.b64encode(bytes(transaction)).decode("ascii")
