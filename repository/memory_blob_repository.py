# repository/memory_blob_repository.py
from typing import Dict
from repository.base import content_hash
from util.errors import BlobNotFoundError


class MemoryBlobRepository:
    """Dict-backed blob store for development and tests."""

    def __init__(self) -> None:
        self._blobs: Dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self._blobs)

    async def store(self, data: bytes) -> str:
        digest = content_hash(data)
        self._blobs.setdefault(digest, bytes(data))
        return digest

    async def fetch(self, digest: str) -> bytes:
        try:
            return self._blobs[digest]
        except KeyError:
            raise BlobNotFoundError(digest) from None
