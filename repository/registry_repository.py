# repository/registry_repository.py
import logging
import threading
from typing import Dict, Optional
from urllib.parse import urljoin, urlsplit
from redis.asyncio import Redis
from redis.exceptions import RedisError
from config.cache import get_redis
from repository.namespaces import PATHS
from util.constants import InternalURIs
from util.errors import BlobStoreUnavailableError

logger = logging.getLogger(__name__)

_BASE = "http://localhost"


def resource_path(uri: str) -> str:
    """
    Normalize a request URI to its path component.
    Scheme, host, query and fragment are dropped; dot segments are resolved.
    """
    path = urlsplit(urljoin(_BASE, uri or "")).path
    return path or InternalURIs.ROOT


class _MemoizedLookup:
    """
    Per-path memo of lookup hits. Entries never change once written, so a hit
    stays valid for the process lifetime. Misses are not memoized.
    """

    def __init__(self) -> None:
        self._memo: Dict[str, str] = {}

    def remember(self, path: str, digest: Optional[str]) -> Optional[str]:
        if digest is not None:
            self._memo[path] = digest
        return digest

    def recall(self, path: str) -> Optional[str]:
        return self._memo.get(path)


class MemoryResourceRegistry(_MemoizedLookup):
    """Process-wide path -> hash map. Lost on restart."""

    def __init__(self) -> None:
        super().__init__()
        self._urls: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._urls)

    async def register(self, uri: str, digest: str) -> bool:
        """Insert unless the path is already registered. True when inserted."""
        path = resource_path(uri)
        with self._lock:
            if path in self._urls:
                return False
            self._urls[path] = digest
        logger.info("registry.register path=%s hash=%s", path, digest)
        return True

    async def lookup(self, uri: str) -> Optional[str]:
        path = resource_path(uri)
        if path == InternalURIs.ROOT:
            # TODO serve an index page for the root path
            return None
        hit = self.recall(path)
        if hit is not None:
            return hit
        with self._lock:
            digest = self._urls.get(path)
        return self.remember(path, digest)


class RedisResourceRegistry(_MemoizedLookup):
    """
    Registry shared across processes through a Redis hash.
    HSETNX makes the first write win even when two uploads race.
    """

    def __init__(self, client: Optional[Redis] = None) -> None:
        super().__init__()
        self._redis = client

    async def _client(self) -> Redis:
        if self._redis is None:
            return await get_redis()
        return self._redis

    async def register(self, uri: str, digest: str) -> bool:
        path = resource_path(uri)
        try:
            r = await self._client()
            inserted = bool(await r.hsetnx(PATHS, path, digest))
        except RedisError as e:
            logger.error("registry.redis.register.error err=%s", type(e).__name__)
            raise BlobStoreUnavailableError(str(e)) from e
        if inserted:
            logger.info("registry.register path=%s hash=%s", path, digest)
        return inserted

    async def lookup(self, uri: str) -> Optional[str]:
        path = resource_path(uri)
        if path == InternalURIs.ROOT:
            return None
        hit = self.recall(path)
        if hit is not None:
            return hit
        try:
            r = await self._client()
            raw = await r.hget(PATHS, path)
        except RedisError as e:
            logger.error("registry.redis.lookup.error err=%s", type(e).__name__)
            raise BlobStoreUnavailableError(str(e)) from e
        if raw is None:
            return None
        digest = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else str(raw)
        return self.remember(path, digest)
