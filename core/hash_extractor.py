# core/hash_extractor.py
import re
from typing import Final, List, Pattern

HASH_LENGTH: Final[int] = 64

REGEX_HASH: Final[Pattern[str]] = re.compile(r"[0-9a-f]{64}", re.IGNORECASE)
REGEX_EXT: Final[Pattern[str]] = re.compile(r"\.[a-z0-9]+")
REGEX_CONTENT_HASH: Final[Pattern[str]] = re.compile(r"^[0-9a-f]{64}$")


def extract_hashes(uri: str) -> List[str]:
    """
    All 64-char hex runs in `uri`, in order of appearance, lowercased.
    Only candidates: picking a winner is up to the caller.
    """
    return [m.lower() for m in REGEX_HASH.findall(uri or "")]


def extract_extensions(uri: str) -> List[str]:
    """Dot-prefixed extension-like runs (".png", ".tar") in order of appearance."""
    return REGEX_EXT.findall(uri or "")


def is_content_hash(value: str) -> bool:
    return bool(REGEX_CONTENT_HASH.match(value or ""))
