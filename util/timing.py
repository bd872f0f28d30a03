# util/timing.py
import time
from contextlib import contextmanager
from typing import Iterator, Dict, Any
import logging


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Dict[str, Any]) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "blob.fetch", hash=h):
          ...
    Emits one INFO on exit: "<name>.done ms=<int> outcome=ok|error key=val ..."
    """
    t0 = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except Exception:
        outcome = "error"
        raise
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        logger.info("%s.done ms=%d outcome=%s%s", name, dt_ms, outcome, suffix)
