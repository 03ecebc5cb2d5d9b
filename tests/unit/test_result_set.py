import asyncio
import random

import pytest

from solana_fanout.domain.models import TransferOutcome
from solana_fanout.domain.services.result_set import (
    ResultSet,
    ResultSetFrozenError,
    ResultSetNotFrozenError,
)


def make_outcome(position: int) -> TransferOutcome:
    return TransferOutcome.failure("src", "dst", f"reason {position}", position)


@pytest.mark.asyncio
async def test_concurrent_appends_lose_nothing():
    results = ResultSet()

    async def worker(position: int):
        await asyncio.sleep(random.random() / 1000)
        await results.append(make_outcome(position))

    await asyncio.gather(*(worker(i) for i in range(200)))
    assert not results.frozen
    results.freeze()

    assert len(results) == 200
    assert results.frozen
    assert [o.position for o in results.outcomes()] == list(range(200))


@pytest.mark.asyncio
async def test_read_before_freeze_is_rejected():
    results = ResultSet()
    await results.append(make_outcome(0))

    with pytest.raises(ResultSetNotFrozenError):
        results.outcomes()


@pytest.mark.asyncio
async def test_append_after_freeze_is_rejected():
    results = ResultSet()
    results.freeze()

    with pytest.raises(ResultSetFrozenError):
        await results.append(make_outcome(0))
    assert len(results) == 0


@pytest.mark.asyncio
async def test_outcomes_returns_a_snapshot():
    results = ResultSet()
    await results.append(make_outcome(1))
    await results.append(make_outcome(0))
    results.freeze()

    snapshot = results.outcomes()
    snapshot.clear()

    assert [o.position for o in results.outcomes()] == [0, 1]
