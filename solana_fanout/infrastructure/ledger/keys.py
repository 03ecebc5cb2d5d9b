"""
Wallet key parsing.

A secret key string is the base58 encoding of 64 bytes: the ed25519 seed
followed by the public key. Addresses are base58 encoded 32-byte public keys.
"""

from __future__ import annotations

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

PUBKEY_LENGTH = 32
SECRET_KEY_LENGTH = 64
MAX_BASE58_PUBKEY_LENGTH = 44


class InvalidPubkeyError(ValueError):
    """Raised when a string is not a valid base58 public key."""


class InvalidKeypairError(ValueError):
    """Raised when a secret key string cannot be turned into a keypair."""


def parse_pubkey(value: str) -> Pubkey:
    if not isinstance(value, str) or not value:
        raise InvalidPubkeyError("empty address")
    if len(value) > MAX_BASE58_PUBKEY_LENGTH:
        raise InvalidPubkeyError("address string too long")
    if value != value.strip():
        raise InvalidPubkeyError("address has surrounding whitespace")
    try:
        raw = base58.b58decode(value)
    except ValueError as exc:
        raise InvalidPubkeyError(f"invalid base58 address: {exc}") from exc
    if len(raw) != PUBKEY_LENGTH:
        raise InvalidPubkeyError(f"address must be {PUBKEY_LENGTH} bytes, got {len(raw)}")
    return Pubkey(raw)


def parse_keypair(secret: str) -> Keypair:
    # Keypair.from_base58_string panics on bad input; decode and check first.
    try:
        raw = base58.b58decode(secret)
    except (ValueError, TypeError) as exc:
        raise InvalidKeypairError("secret key is not valid base58") from exc
    if len(raw) != SECRET_KEY_LENGTH:
        raise InvalidKeypairError(
            f"secret key must decode to {SECRET_KEY_LENGTH} bytes, got {len(raw)}"
        )
    keypair = Keypair.from_seed(raw[:PUBKEY_LENGTH])
    if bytes(keypair.pubkey()) != raw[PUBKEY_LENGTH:]:
        raise InvalidKeypairError("secret key does not match its public key half")
    return keypair
