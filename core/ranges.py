# core/ranges.py
import re
from typing import Final, List, Optional, Pattern, Tuple

ByteRange = Tuple[int, int]

REGEX_RANGE: Final[Pattern[str]] = re.compile(r"(\d*-\d*)")


def parse_content_range(
    range_header: Optional[str], content_length: int, *, legacy: bool = False
) -> Optional[List[ByteRange]]:
    """
    Parse a `Range` header into inclusive (start, end) pairs.

    Every `digits?-digits?` run in the header counts, so `bytes=0-9, 20-29`
    yields two pairs. Returns None when the header holds no pair at all and the
    whole body should be served. Callers only ever use the first pair.
    """
    # A missing header arrives as its string form ("None") and yields no pairs.
    ranges = REGEX_RANGE.findall(str(range_header))
    if not ranges:
        return None
    return [parse_content_range_pair(r, content_length, legacy=legacy) for r in ranges]


def parse_content_range_pair(
    range_str: str, content_length: int, *, legacy: bool = False
) -> ByteRange:
    """
    Classify one `lesser-greater` pair:
      both present   -> (lesser, greater), passed through even when inverted
      `N-`           -> (N, length - 1)
      `-N`           -> (length - N, length - 1), the last N bytes
      `-`            -> (0, length - 1)

    legacy reproduces the first-generation parser: an explicit 0 counts as
    absent (`0-499` is read as `-499`) and `-N` starts at length - N - 1.
    """
    lesser_s, _, greater_s = range_str.partition("-")
    lesser = int(lesser_s) if lesser_s else None
    greater = int(greater_s) if greater_s else None
    if legacy:
        lesser = lesser or None
        greater = greater or None

    if lesser is not None and greater is not None:
        return lesser, greater
    if lesser is not None:
        return lesser, content_length - 1
    if greater is not None:
        start = content_length - greater - (1 if legacy else 0)
        return start, content_length - 1
    return 0, content_length - 1
