# service/cdn_service.py
import logging
from typing import Mapping, Optional
from fastapi import status
from core.hash_extractor import extract_extensions, extract_hashes
from core.mime import content_type_for_extension, extension_for_content_type
from core.ranges import ByteRange, parse_content_range
from core.resolution import first_present
from model.api import NotFoundResponse, ResponseEnvelope, StoreResponse
from repository.base import BlobStore, ResourceRegistry
from util.constants import (
    DEFAULT_EXTENSION,
    DEFAULT_UPLOAD_CONTENT_TYPE,
    ExternalURIs,
    JSON_CONTENT_TYPE,
    METHODS_RETRIEVE,
    METHODS_STORE,
)
from util.functions import cors_headers, sanitize_headers

logger = logging.getLogger(__name__)


def normalize_range(byte_range: ByteRange, length: int) -> Optional[ByteRange]:
    """
    Clamp a parsed pair into [0, length - 1].
    None when nothing satisfiable remains (inverted pair, empty blob).
    """
    start, end = byte_range
    start = max(start, 0)
    end = min(end, length - 1)
    if start > end:
        return None
    return start, end


class CdnService:
    """
    Answers one request with one ResponseEnvelope.

    Flow:
    - non-empty body -> store: blob store write, first-write-wins registration
      of the request path, JSON {hash, url}.
    - otherwise -> retrieve: hash from the URI, else from the registry; GET
      serves the body (206 for a Range request), any other method gets the
      headers only; nothing resolved -> 404 JSON.
    """

    def __init__(
        self,
        blobs: BlobStore,
        registry: ResourceRegistry,
        *,
        cdn_host: str,
        legacy_ranges: bool = False,
        partial_length_total: bool = True,
    ) -> None:
        self._blobs = blobs
        self._registry = registry
        self._cdn_host = cdn_host
        self._legacy_ranges = legacy_ranges
        self._partial_length_total = partial_length_total

    @property
    def blobs(self) -> BlobStore:
        return self._blobs

    @property
    def registry(self) -> ResourceRegistry:
        return self._registry

    async def dispatch(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
    ) -> ResponseEnvelope:
        if body:
            return await self.store(uri, headers, body)
        return await self.retrieve(method, uri, headers)

    async def store(
        self, uri: str, headers: Mapping[str, str], body: bytes
    ) -> ResponseEnvelope:
        head = sanitize_headers(headers.items())
        content_type = head.get("Content-Type") or DEFAULT_UPLOAD_CONTENT_TYPE

        digest = await self._blobs.store(body)
        await self._registry.register(uri, digest)
        logger.info("cdn.store.ok hash=%s bytes=%d", digest, len(body))

        payload = StoreResponse(
            hash=digest,
            url=ExternalURIs.CDN_URL.format(
                host=self._cdn_host,
                hash=digest,
                ext=extension_for_content_type(content_type),
            ),
        )
        return ResponseEnvelope(
            headers={
                "Content-Type": JSON_CONTENT_TYPE,
                **cors_headers(METHODS_STORE),
            },
            body=payload.model_dump_json().encode("utf-8"),
        )

    async def resolve_hash(self, uri: str) -> Optional[str]:
        # A hash in the URI wins over the registry.
        candidates = extract_hashes(uri)
        if candidates:
            return first_present(candidates)
        return first_present(await self._registry.lookup(uri))

    async def retrieve(
        self, method: str, uri: str, headers: Mapping[str, str]
    ) -> ResponseEnvelope:
        digest = await self.resolve_hash(uri)
        ext = first_present(extract_extensions(uri)) or DEFAULT_EXTENSION
        content_type = content_type_for_extension(ext)

        if digest is None:
            logger.info("cdn.retrieve.miss uri=%s", uri)
            return self.not_found(uri)

        data = await self._blobs.fetch(digest)
        length = len(data)
        head = {
            "Accept-Ranges": "bytes",
            "Content-Type": content_type,
            "Content-Length": str(length),
            **cors_headers(METHODS_RETRIEVE),
        }

        if method.upper() != "GET":
            logger.info("cdn.retrieve.head method=%s hash=%s", method, digest)
            return ResponseEnvelope(headers=head)

        ranges = parse_content_range(
            _header(headers, "range"), length, legacy=self._legacy_ranges
        )
        byte_range = normalize_range(ranges[0], length) if ranges else None
        if byte_range is None:
            logger.info("cdn.retrieve.ok hash=%s bytes=%d", digest, length)
            return ResponseEnvelope(headers=head, body=data)

        start, end = byte_range
        chunk = data[start : end + 1]
        head["Content-Range"] = f"bytes {start}-{end}/{length}"
        if not self._partial_length_total:
            head["Content-Length"] = str(len(chunk))
        logger.info(
            "cdn.retrieve.partial hash=%s range=%d-%d/%d", digest, start, end, length
        )
        return ResponseEnvelope(
            status_code=status.HTTP_206_PARTIAL_CONTENT, headers=head, body=chunk
        )

    @staticmethod
    def not_found(uri: str) -> ResponseEnvelope:
        return ResponseEnvelope(
            status_code=status.HTTP_404_NOT_FOUND,
            headers={"Content-Type": JSON_CONTENT_TYPE, **cors_headers(METHODS_RETRIEVE)},
            body=NotFoundResponse(url=uri).model_dump_json().encode("utf-8"),
        )


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
