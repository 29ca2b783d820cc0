"""
Utility decorators and context managers.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator

logger = logging.getLogger(__name__)


@contextmanager
def timer() -> Iterator[Dict[str, int]]:
    """
    Measure wall-clock time of a block in milliseconds.

    The yielded dict receives its "ms" entry when the block exits,
    so read it after the with statement.

    Example:
        >>> with timer() as t:
        ...     do_work()
        >>> elapsed = t["ms"]
    """
    result = {"ms": 0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["ms"] = int((time.perf_counter() - start) * 1000)


def log_duration(func):
    """Log how long an async function took at DEBUG level"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        with timer() as t:
            result = await func(*args, **kwargs)
        logger.debug(f"{func.__qualname__} took {t['ms']} ms")
        return result

    return wrapper
