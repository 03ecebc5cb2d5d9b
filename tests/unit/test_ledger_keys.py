import base58
import pytest
from solders.pubkey import Pubkey

from solana_fanout.infrastructure.ledger.keys import (
    InvalidKeypairError,
    InvalidPubkeyError,
    parse_keypair,
    parse_pubkey,
)


def test_keypair_base58_round_trip(keypair_factory):
    keypair = keypair_factory(1)
    secret = str(keypair)

    restored = parse_keypair(secret)

    assert restored.pubkey() == keypair.pubkey()
    assert len(base58.b58decode(secret)) == 64


def test_keypair_rejects_mismatched_public_half(keypair_factory):
    seed = bytes([1]) * 32
    other = keypair_factory(2)
    secret = base58.b58encode(seed + bytes(other.pubkey())).decode()

    with pytest.raises(InvalidKeypairError, match="public key half"):
        parse_keypair(secret)


@pytest.mark.parametrize("secret", ["0OIl", "abc", ""])
def test_keypair_rejects_malformed_secret(secret):
    with pytest.raises(InvalidKeypairError):
        parse_keypair(secret)


def test_pubkey_round_trip(keypair_factory):
    address = str(keypair_factory(4).pubkey())

    parsed = parse_pubkey(address)

    assert isinstance(parsed, Pubkey)
    assert str(parsed) == address


@pytest.mark.parametrize(
    "address",
    ["not-an-address", "abc", "", "1" * 45, "0" * 44],
)
def test_pubkey_rejects_invalid_strings(address):
    with pytest.raises(InvalidPubkeyError):
        parse_pubkey(address)


def test_pubkey_rejects_surrounding_whitespace(keypair_factory):
    address = str(keypair_factory(5).pubkey())

    for padded in (f" {address}", f"{address} ", f"{address}\n"):
        with pytest.raises(InvalidPubkeyError):
            parse_pubkey(padded)
