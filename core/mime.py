# core/mime.py
import mimetypes
from typing import Final, FrozenSet
from util.constants import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_UPLOAD_CONTENT_TYPE,
    DEFAULT_UPLOAD_EXTENSION,
)

UTF8_TYPES: Final[FrozenSet[str]] = frozenset(
    {
        "application/json",
        "application/javascript",
        "application/x-javascript",
        "text/javascript",
    }
)

_mimes = mimetypes.MimeTypes()
# Not registered on every platform.
_mimes.add_type("text/markdown", ".md")
_mimes.add_type("image/webp", ".webp")
_mimes.add_type("font/woff2", ".woff2")
_mimes.add_type("font/woff", ".woff")
_mimes.add_type("audio/ogg", ".oga")
_mimes.add_type("application/javascript", ".js")
_mimes.add_type("application/x-javascript", ".js")


def _prefer(mime: str, ext: str) -> None:
    # Last registration owns the extension; first inverse entry wins on guess.
    _mimes.add_type(mime, ext)
    exts = _mimes.types_map_inv[True][mime]
    exts.remove(ext)
    exts.insert(0, ext)


# .js moved from application/javascript to text/javascript in 3.12.
_prefer("text/javascript", ".mjs")
_prefer("text/javascript", ".js")
_prefer("audio/ogg", ".ogg")
_prefer("image/x-icon", ".ico")
_prefer("application/xml", ".xml")


def content_type_for_extension(ext: str) -> str:
    """'.html' -> 'text/html; charset=utf-8'; unknown -> 'text/plain'"""
    ext = (ext or "").lower()
    if not ext.startswith("."):
        ext = "." + ext
    mime, _ = _mimes.guess_type("file" + ext, strict=False)
    if not mime:
        return DEFAULT_CONTENT_TYPE
    if mime.startswith("text/") or mime in UTF8_TYPES:
        return f"{mime}; charset=utf-8"
    return mime


def extension_for_content_type(content_type: str) -> str:
    """'image/png; q=1' -> 'png'; unknown -> 'bin'"""
    mime = (content_type or DEFAULT_UPLOAD_CONTENT_TYPE).split(";", 1)[0]
    mime = mime.strip().lower()
    ext = _mimes.guess_extension(mime, strict=False)
    return ext.lstrip(".") if ext else DEFAULT_UPLOAD_EXTENSION
