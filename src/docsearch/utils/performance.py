"""Stage timing for builds."""

import time
from contextlib import contextmanager

from loguru import logger


@contextmanager
def timer(label: str, level: str = "INFO"):
    """Log how long the ``with`` body took, also when it raises."""
    started = time.perf_counter()
    try:
        yield
    finally:
        logger.log(level, f"{label} took {time.perf_counter() - started:.3f}s")
