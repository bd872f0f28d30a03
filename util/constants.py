from typing import Final


class InternalURIs:
    ROOT = "/"
    HEALTHZ = "/healthz"
    PUT = "/put"
    PUT_PATH = PUT + "/{path:path}"
    ANY_PATH = "/{path:path}"


class ExternalURIs:
    CDN_URL = "https://{host}/{hash}.{ext}"


CDN_METHODS: Final[list[str]] = [
    "GET",
    "HEAD",
    "PUT",
    "POST",
    "PATCH",
    "DELETE",
    "OPTIONS",
]

DEFAULT_EXTENSION: Final[str] = ".html"
DEFAULT_CONTENT_TYPE: Final[str] = "text/plain"
DEFAULT_UPLOAD_CONTENT_TYPE: Final[str] = "application/octet-stream"
DEFAULT_UPLOAD_EXTENSION: Final[str] = "bin"
JSON_CONTENT_TYPE: Final[str] = "application/json"

METHODS_STORE: Final[str] = "PUT"
METHODS_RETRIEVE: Final[str] = "GET, PUT"
