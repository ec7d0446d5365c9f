"""
Retry utilities
"""

import asyncio
import logging
from typing import Awaitable, Callable, Any

logger = logging.getLogger(__name__)


async def call_with_retry(
    func: Callable[..., Awaitable[Any]],
    *args,
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff_factor: float = 2.0,
    exceptions: tuple = (Exception,),
    **kwargs
) -> Any:
    """
    Await a coroutine function, retrying on selected exceptions

    Args:
        func: Coroutine function to call
        max_attempts: Maximum number of attempts
        delay: Initial delay between attempts in seconds
        backoff_factor: Factor to increase delay
        exceptions: Tuple of exceptions to retry on

    The wait before attempt n + 1 is delay * backoff_factor ** (n - 1).
    The last exception is re-raised once attempts are exhausted; anything
    not listed in `exceptions` propagates immediately.
    """
    current_delay = delay

    for attempt in range(max_attempts):
        try:
            result = await func(*args, **kwargs)
            if attempt > 0:
                logger.info(f"Function {func.__name__} succeeded on attempt {attempt + 1}")
            return result

        except exceptions as e:
            if attempt == max_attempts - 1:
                logger.error(f"Function {func.__name__} failed after {max_attempts} attempts: {e}")
                raise

            logger.warning(f"Function {func.__name__} failed on attempt {attempt + 1}: {e}. Retrying in {current_delay}s...")
            await asyncio.sleep(current_delay)
            current_delay *= backoff_factor
