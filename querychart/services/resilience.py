# querychart/services/resilience.py
"""Retry with exponential backoff for generation provider calls."""

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Type, TypeVar

logger = logging.getLogger("resilience")

T = TypeVar("T")


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    retry_on: tuple[Type[BaseException], ...] = (Exception,),
    **kwargs: Any
) -> T:
    """Call an async function, retrying on the given exception types.

    Args:
        func: Async function to call.
        max_attempts: Total number of attempts, including the first.
        base_delay: Delay before the first retry, in seconds.
        max_delay: Upper bound for any single delay.
        exponential_base: Growth factor of the delay per attempt.
        jitter: Whether to randomize delays by 50-150%.
        retry_on: Exception types that trigger a retry.

    Returns:
        The function's result.

    Raises:
        The last exception once attempts are exhausted, or immediately for
        exception types not listed in ``retry_on``.
    """
    for attempt in range(max_attempts):
        try:
            return await func(*args, **kwargs)
        except retry_on as e:
            if attempt == max_attempts - 1:
                logger.error(
                    "All %d attempts failed for %s: %s",
                    max_attempts, getattr(func, "__name__", func), e
                )
                raise

            delay = min(base_delay * (exponential_base ** attempt), max_delay)
            if jitter:
                delay = delay * (0.5 + random.random())

            logger.warning(
                "Attempt %d/%d failed: %s. Retrying in %.2fs...",
                attempt + 1, max_attempts, str(e), delay
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_async called with max_attempts < 1")
