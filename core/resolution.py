# core/resolution.py
from typing import List, Optional, Sequence, Union

Candidate = Union[str, Sequence["Candidate"], None]


def reduce_first(*candidates: Candidate) -> Union[str, bool]:
    """
    Return the first non-empty string among `candidates`, flattening nested
    sequences depth-first in order. Returns False when nothing is present.

      reduce_first(["a", "b"], None, "c") -> "a"
      reduce_first([], None)              -> False
    """
    stack: List[Candidate] = list(reversed(candidates))
    while stack:
        item = stack.pop()
        if not item:
            continue
        if isinstance(item, str):
            return item
        stack.extend(reversed(list(item)))
    return False


def first_present(*candidates: Candidate) -> Optional[str]:
    value = reduce_first(*candidates)
    return value if isinstance(value, str) else None
