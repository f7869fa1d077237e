"""
Fixed-count retry for awaitable operations

Runs an operation up to a fixed number of times with no delay between
attempts. The operation must be safe to repeat.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type, stop_after_attempt

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_failed_attempt(name: str, num_attempts: int) -> Callable[[RetryCallState], None]:
    def log(retry_state: RetryCallState) -> None:
        attempt = retry_state.attempt_number
        action = "giving up" if attempt >= num_attempts else "retrying"
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(f"{name} failed on attempt {attempt}/{num_attempts}, {action}: {error!r}")

    return log


async def with_retry(
    num_attempts: int,
    operation: Callable[[], Awaitable[T]],
    *,
    name: str = "operation",
) -> T:
    """
    Await operation until it succeeds or num_attempts is used up

    Args:
        num_attempts: Total number of invocations allowed (not retries after the first)
        operation: Zero-argument callable returning a fresh awaitable per attempt
        name: Label used in log lines

    Returns:
        The value of the first successful attempt

    Raises:
        ValueError: If num_attempts is lower than 1
        Exception: The exception raised by the last attempt
    """
    if num_attempts < 1:
        raise ValueError(f"num_attempts must be >= 1, got {num_attempts}")

    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(num_attempts),
        retry=retry_if_exception_type(Exception),
        after=_log_failed_attempt(name, num_attempts),
        reraise=True,
    ):
        with attempt:
            return await operation()
