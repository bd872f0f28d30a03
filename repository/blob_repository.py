# repository/blob_repository.py
import logging
from typing import Optional
from redis.asyncio import Redis
from redis.exceptions import RedisError
from config.cache import get_redis
from config.settings import settings
from repository.base import content_hash
from repository.namespaces import BLOBS
from util.errors import BlobNotFoundError, BlobStoreUnavailableError
from util.timing import timed

logger = logging.getLogger(__name__)


class RedisBlobRepository:
    """
    Redis-backed content-addressed storage keyed by the SHA-256 of the bytes.

    Blobs are immutable: a store of bytes already present is a no-op (SET NX).
    BLOB_TTL_SECONDS > 0 sets an expiry on first store; 0 keeps blobs forever.
    """

    def __init__(
        self,
        ttl_seconds: int = settings.BLOB_TTL_SECONDS,
        client: Optional[Redis] = None,
    ) -> None:
        self._ttl = int(ttl_seconds) or None
        self._redis = client

    async def _client(self) -> Redis:
        if self._redis is None:
            return await get_redis()
        return self._redis

    @staticmethod
    def _key(digest: str) -> str:
        return f"{BLOBS}:{digest}"

    async def store(self, data: bytes) -> str:
        digest = content_hash(data)
        try:
            r = await self._client()
            with timed(logger, "blob.redis.store", hash=digest, bytes=len(data)):
                await r.set(self._key(digest), data, ex=self._ttl, nx=True)
        except RedisError as e:
            logger.error("blob.redis.store.error err=%s", type(e).__name__)
            raise BlobStoreUnavailableError(str(e)) from e
        return digest

    async def fetch(self, digest: str) -> bytes:
        try:
            r = await self._client()
            with timed(logger, "blob.redis.fetch", hash=digest):
                raw = await r.get(self._key(digest))
        except RedisError as e:
            logger.error("blob.redis.fetch.error err=%s", type(e).__name__)
            raise BlobStoreUnavailableError(str(e)) from e
        if raw is None:
            raise BlobNotFoundError(digest)
        return bytes(raw)
