"""Shared fixtures.

Settings are read from the environment at import time, so the in-memory
backends are selected here before any project module is imported.
"""

from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("BLOB_BACKEND", "memory")
os.environ.setdefault("REGISTRY_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_TIMES", "0")
os.environ.setdefault("CDN_NAME", "cdn")

import pytest  # noqa: E402
from redis.exceptions import ConnectionError as RedisConnectionError  # noqa: E402

from repository.memory_blob_repository import MemoryBlobRepository  # noqa: E402
from repository.registry_repository import MemoryResourceRegistry  # noqa: E402
from service.cdn_service import CdnService  # noqa: E402

CDN_HOST = "cdn.nodesite.eu"


class FakeRedis:
    """The handful of redis.asyncio calls the repositories make."""

    def __init__(self) -> None:
        self.values: dict[str, bytes] = {}
        self.hashes: dict[str, dict[str, bytes]] = {}
        self.expiries: dict[str, int | None] = {}

    async def set(self, key, value, ex=None, nx=False):
        if nx and key in self.values:
            return None
        self.values[key] = bytes(value)
        self.expiries[key] = ex
        return True

    async def get(self, key):
        return self.values.get(key)

    async def hsetnx(self, name, key, value):
        fields = self.hashes.setdefault(name, {})
        if key in fields:
            return 0
        fields[key] = value.encode("utf-8") if isinstance(value, str) else value
        return 1

    async def hget(self, name, key):
        return self.hashes.get(name, {}).get(key)


class BrokenRedis:
    async def _fail(self, *args, **kwargs):
        raise RedisConnectionError("connection refused")

    set = get = hsetnx = hget = _fail


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def broken_redis() -> BrokenRedis:
    return BrokenRedis()


@pytest.fixture
def blobs() -> MemoryBlobRepository:
    return MemoryBlobRepository()


@pytest.fixture
def registry() -> MemoryResourceRegistry:
    return MemoryResourceRegistry()


@pytest.fixture
def service(blobs, registry) -> CdnService:
    return CdnService(blobs, registry, cdn_host=CDN_HOST)
