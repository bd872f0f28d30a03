# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class BlobBackend(str, Enum):
    REDIS = "redis"
    HTTP = "http"
    MEMORY = "memory"


class RegistryBackend(str, Enum):
    MEMORY = "memory"
    REDIS = "redis"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    NOT_FOUND = ErrorInfo("Resource not found", status.HTTP_404_NOT_FOUND)
    UPLOAD_TOO_LARGE = ErrorInfo(
        "Upload too large", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    )
    RATE_LIMITED = ErrorInfo(
        "Too many requests. Try again in 60s.", status.HTTP_429_TOO_MANY_REQUESTS
    )
    BLOB_STORE_UNAVAILABLE = ErrorInfo(
        "Blob store unavailable", status.HTTP_502_BAD_GATEWAY
    )
