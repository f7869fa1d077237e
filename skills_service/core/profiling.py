import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def profile(name: str) -> Iterator[None]:
    """Log the wall-clock duration of the wrapped block at DEBUG level.

    Timing is recorded whether the block returns or raises; exceptions pass
    through untouched.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(f"profile name={name} duration_ms={elapsed_ms}")
