# util/functions.py
import re
from typing import Dict, Iterable, Tuple

HOP_BY_HOP = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "proxy-connection",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)

# RFC 7230 token characters
_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def canonical_header(name: str) -> str:
    """content-type -> Content-Type"""
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def sanitize_headers(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """
    - Canonicalize header names to Title-Case.
    - First occurrence of a duplicate name wins.
    - Drop hop-by-hop headers and names that are not valid tokens.
    """
    out: Dict[str, str] = {}
    for name, value in pairs:
        name = (name or "").strip()
        if not name or not _TOKEN.match(name):
            continue
        if name.lower() in HOP_BY_HOP:
            continue
        key = canonical_header(name)
        if key in out:
            continue
        out[key] = str(value).strip()
    return out


def cors_headers(methods: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": methods,
        "Access-Control-Allow-Headers": "*",
    }
