# repository/base.py
import hashlib
from typing import Optional, Protocol


def content_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class BlobStore(Protocol):
    """Content-addressed bytes: store returns the hash, fetch returns the bytes."""

    async def store(self, data: bytes) -> str: ...

    async def fetch(self, content_hash: str) -> bytes: ...


class ResourceRegistry(Protocol):
    """Path -> content hash, first write wins."""

    async def register(self, uri: str, content_hash: str) -> bool: ...

    async def lookup(self, uri: str) -> Optional[str]: ...
