"""Reusable decorators for vocabulary building."""

import functools
import logging
import time
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """Log execution time of a builder, plus the size of the vocabulary it returns."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        """Call ``func`` and always log elapsed time."""
        start = time.perf_counter()
        size = None
        try:
            result = func(*args, **kwargs)
            size = len(result)
            return result
        # log execution time even if the build fails
        finally:
            elapsed = time.perf_counter() - start
            outcome = f"{size} tokens" if size is not None else "failed"
            log.info(
                f"{func.__name__} finished in {elapsed:.2f} s "
                f"({elapsed / 60:.2f} mins): {outcome}"
            )

    return wrapper
