# util/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


class BlobStoreError(Exception):
    """Base for failures reported by a blob store backend."""


class BlobNotFoundError(BlobStoreError):
    def __init__(self, content_hash: str) -> None:
        super().__init__(f"Blob not found: {content_hash}")
        self.content_hash = content_hash


class BlobStoreUnavailableError(BlobStoreError):
    pass
