"""
Shared pytest fixtures for typed-session tests.

This module provides:
- Redis mocks for RedisSession tests (plain and with in-memory hashes)
- Common typed session keys
"""

import os
import sys
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typed_session.modules.key import SessionKey


# =============================================================================
# Session Keys
# =============================================================================

USER_KEY: SessionKey[str] = SessionKey("user", str)
TIMESTAMP_KEY: SessionKey[int] = SessionKey("timestamp", int)


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

class FakePipeline:
    """Buffers commands and runs them in order against the mock on execute()."""

    def __init__(self, redis):
        self._redis = redis
        self._commands = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self._commands = []

    def hget(self, name, key):
        self._commands.append(("hget", (name, key)))
        return self

    def hdel(self, name, *keys):
        self._commands.append(("hdel", (name, *keys)))
        return self

    async def execute(self):
        results = []
        for command, args in self._commands:
            results.append(await getattr(self._redis, command)(*args))
        self._commands = []
        return results


@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async hash operations."""
    redis = AsyncMock()

    redis.hget = AsyncMock(return_value=None)
    redis.hset = AsyncMock(return_value=1)
    redis.hdel = AsyncMock(return_value=1)
    redis.hgetall = AsyncMock(return_value={})
    redis.expire = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.ping = AsyncMock(return_value=True)

    # Pipeline support: hget/hdel chain, execute() reports the removed field
    pipeline = MagicMock()
    pipeline.hget.return_value = pipeline
    pipeline.hdel.return_value = pipeline
    pipeline.execute = AsyncMock(return_value=[None, 0])
    pipeline.__aenter__.return_value = pipeline
    redis.pipeline = MagicMock(return_value=pipeline)

    return redis


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory hash storage for more realistic tests.

    This allows testing code that reads back what it writes.
    """
    storage = {}
    ttls = {}

    redis = AsyncMock()

    async def mock_hget(name, key):
        return storage.get(name, {}).get(key)

    async def mock_hset(name, key, value):
        fields = storage.setdefault(name, {})
        created = key not in fields
        fields[key] = value
        return int(created)

    async def mock_hdel(name, *keys):
        fields = storage.get(name, {})
        count = 0
        for key in keys:
            if key in fields:
                del fields[key]
                count += 1
        if name in storage and not fields:
            del storage[name]
        return count

    async def mock_hgetall(name):
        return dict(storage.get(name, {}))

    async def mock_expire(name, ttl):
        if name not in storage:
            return False
        ttls[name] = ttl
        return True

    async def mock_delete(*names):
        count = 0
        for name in names:
            if name in storage:
                del storage[name]
                count += 1
        return count

    async def mock_ping():
        return True

    redis.hget = mock_hget
    redis.hset = mock_hset
    redis.hdel = mock_hdel
    redis.hgetall = mock_hgetall
    redis.expire = mock_expire
    redis.delete = mock_delete
    redis.ping = mock_ping
    redis.pipeline = MagicMock(side_effect=lambda transaction=True: FakePipeline(redis))
    redis._storage = storage  # Expose for test assertions
    redis._ttls = ttls

    return redis
