import asyncio
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest
import yaml
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from solana_fanout.infrastructure.ledger.transaction import transaction_signature
from solana_fanout.utils.logging_redaction import clear_secrets

BLOCKHASH = str(Pubkey(bytes([7] * 32)))


class FakeLedger:
    """
    In-memory ledger service.

    ``blockhash_error`` / ``send_errors`` make calls fail; ``send_errors`` is
    keyed by recipient address. ``delays`` (also keyed by recipient) suspend
    the submitting task so completions interleave.
    """

    def __init__(
        self,
        blockhash_error: Optional[Exception] = None,
        send_errors: Optional[Dict[str, Exception]] = None,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.blockhash_error = blockhash_error
        self.send_errors = send_errors or {}
        self.delays = delays or {}
        self.blockhash_calls = 0
        self.submitted: List[Transaction] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    async def get_latest_blockhash(self) -> str:
        self.blockhash_calls += 1
        await asyncio.sleep(0)
        if self.blockhash_error is not None:
            raise self.blockhash_error
        return BLOCKHASH

    async def send_and_confirm_transaction(self, transaction: Transaction) -> str:
        recipient = str(transaction.message.account_keys[1])
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(recipient, 0))
            error = self.send_errors.get(recipient)
            if error is not None:
                raise error
            self.submitted.append(transaction)
            return transaction_signature(transaction)
        finally:
            self.in_flight -= 1


@pytest.fixture(autouse=True)
def _reset_redaction_secrets():
    yield
    clear_secrets()


@pytest.fixture()
def keypair_factory() -> Callable[[int], Keypair]:
    def make(seed_byte: int) -> Keypair:
        return Keypair.from_seed(bytes([seed_byte]) * 32)
    return make


@pytest.fixture()
def fake_ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture()
def make_ledger():
    return FakeLedger


@pytest.fixture()
def wallet_file(tmp_path: Path) -> Callable[[List[str], List[str]], Path]:
    def write(senders: List[str], recipients: List[str]) -> Path:
        path = tmp_path / "wallets.yml"
        with path.open("w") as f:
            yaml.safe_dump(
                {"sender_wallets": senders, "recipient_wallets": recipients},
                f,
                sort_keys=False,
            )
        return path
    return write

