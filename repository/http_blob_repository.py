# repository/http_blob_repository.py
import logging
from typing import Optional
import httpx
from fastapi import status
from core.hash_extractor import is_content_hash
from util.errors import BlobNotFoundError, BlobStoreUnavailableError
from util.timing import timed

logger = logging.getLogger(__name__)


class HttpBlobRepository:
    """
    Remote blob service over HTTP.

    Flow:
    - store: PUT <base>/ with the raw bytes; the service answers with the hash,
      either as plain text or as JSON {"hash": "..."}.
    - fetch: GET <base>/<hash>; 404 means the service does not know the hash.
    No retries: connection errors and non-2xx answers surface as
    BlobStoreUnavailableError.
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[httpx.Timeout] = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=timeout or httpx.Timeout(30.0, connect=5.0)
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def store(self, data: bytes) -> str:
        try:
            with timed(logger, "blob.http.store", bytes=len(data)):
                res = await self._client.put(
                    f"{self._base}/",
                    content=data,
                    headers={"Content-Type": "application/octet-stream"},
                )
        except httpx.RequestError as e:
            logger.error("blob.http.store.request_error err=%s", type(e).__name__)
            raise BlobStoreUnavailableError(str(e)) from e

        if res.status_code // 100 != 2:
            logger.error("blob.http.store.bad_status %d", res.status_code)
            raise BlobStoreUnavailableError(f"store failed: HTTP {res.status_code}")

        digest = self._parse_hash(res)
        if not is_content_hash(digest):
            logger.error("blob.http.store.bad_hash")
            raise BlobStoreUnavailableError("store returned an invalid hash")
        return digest

    async def fetch(self, digest: str) -> bytes:
        try:
            with timed(logger, "blob.http.fetch", hash=digest):
                res = await self._client.get(f"{self._base}/{digest}")
        except httpx.RequestError as e:
            logger.error("blob.http.fetch.request_error err=%s", type(e).__name__)
            raise BlobStoreUnavailableError(str(e)) from e

        if res.status_code == status.HTTP_404_NOT_FOUND:
            raise BlobNotFoundError(digest)
        if res.status_code // 100 != 2:
            logger.error("blob.http.fetch.bad_status %d", res.status_code)
            raise BlobStoreUnavailableError(f"fetch failed: HTTP {res.status_code}")
        return res.content

    @staticmethod
    def _parse_hash(res: httpx.Response) -> str:
        if res.headers.get("content-type", "").startswith("application/json"):
            try:
                body = res.json()
            except ValueError:
                return ""
            if not isinstance(body, dict):
                return ""
            return str(body.get("hash", "")).strip().lower()
        return res.text.strip().lower()
