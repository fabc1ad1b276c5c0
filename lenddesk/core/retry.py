"""Retry utilities for async operations.

Exponential backoff for transient failures of upstream calls
(currently the Identity Toolkit sign-in request).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 2
DEFAULT_BASE_DELAY = 0.2  # seconds


def _calculate_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Delay before the next try: base_delay * 2^attempt (attempt is zero-indexed)."""
    return base_delay * (2**attempt)


async def with_retry[T](
    fn: Callable[[], Awaitable[T]],
    attempts: int = DEFAULT_ATTEMPTS,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    base_delay: float = DEFAULT_BASE_DELAY,
) -> T:
    """Execute an async callable, retrying on the given exception types.

    Args:
        fn: Zero-argument coroutine factory (typically a closure)
        attempts: Maximum number of attempts, at least 1
        exceptions: Exception types that trigger a retry
        base_delay: Base delay in seconds for exponential backoff

    Raises:
        The last exception if every attempt fails
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1")

    last_error: Exception | None = None

    for attempt in range(attempts):
        try:
            return await fn()
        except exceptions as e:
            last_error = e
            if attempt < attempts - 1:
                delay = _calculate_delay(attempt, base_delay)
                logger.debug(
                    "Attempt %d/%d failed (%s), retrying in %.2fs",
                    attempt + 1,
                    attempts,
                    type(e).__name__,
                    delay,
                )
                await asyncio.sleep(delay)

    raise last_error  # type: ignore[misc]
