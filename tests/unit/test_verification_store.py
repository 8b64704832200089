import asyncio
from datetime import datetime, timezone

import pytest

from app.domain.entities import Purpose, VerificationRecord
from app.infrastructure.memory.verification_store import InMemoryVerificationStore


def make_record(code: str = "123456") -> VerificationRecord:
    return VerificationRecord(
        code=code,
        issued_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        purpose=Purpose.LOGIN,
    )


@pytest.mark.asyncio
async def test_put_get_remove():
    store = InMemoryVerificationStore()
    assert await store.get("k") is None

    await store.put("k", make_record())
    assert (await store.get("k")).code == "123456"

    await store.put("k", make_record("654321"))
    assert (await store.get("k")).code == "654321"
    assert len(store) == 1

    await store.remove("k")
    assert await store.get("k") is None
    # removing twice is a no-op
    await store.remove("k")


@pytest.mark.asyncio
async def test_lock_serializes_same_key():
    store = InMemoryVerificationStore()
    order: list[str] = []

    async def worker(name: str) -> None:
        async with store.lock("k"):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))
    assert order in (
        ["a-in", "a-out", "b-in", "b-out"],
        ["b-in", "b-out", "a-in", "a-out"],
    )


@pytest.mark.asyncio
async def test_lock_does_not_block_other_keys():
    store = InMemoryVerificationStore()

    async with store.lock("a"):
        await asyncio.wait_for(_enter(store, "b"), timeout=1)


async def _enter(store: InMemoryVerificationStore, key: str) -> None:
    async with store.lock(key):
        pass


@pytest.mark.asyncio
async def test_locks_are_released_after_use():
    store = InMemoryVerificationStore()
    async with store.lock("k"):
        assert "k" in store._locks  # type: ignore[attr-defined]
    assert store._locks == {}  # type: ignore[attr-defined]
