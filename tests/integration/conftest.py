# tests/integration/conftest.py
import os

import pytest
import pytest_asyncio
from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError


@pytest_asyncio.fixture
async def redis_client():
    url = os.environ.get("REDIS_URL", "redis://redis:6379/0")
    r = Redis.from_url(
        url, encoding="utf-8", decode_responses=True, socket_connect_timeout=1
    )
    try:
        await r.ping()
    except (RedisConnectionError, RedisTimeoutError, OSError):
        await r.aclose()
        pytest.skip(f"Redis not reachable at {url}")
    try:
        yield r
    finally:
        await r.aclose()
