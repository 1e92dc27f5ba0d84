import asyncio
import logging
import random
from typing import Awaitable, Callable, Tuple, Type, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    *,
    retries: int = 3,
    base: float = 0.5,
    cap: float = 5.0,
    jitter: float = 0.25,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """Await a coroutine factory with exponential backoff and jitter.

    Args:
        func: Zero-argument callable returning a fresh awaitable per attempt.
        retries: Maximum retry attempts after the first failure.
        base: Base delay seconds.
        cap: Maximum backoff seconds.
        jitter: Random jitter added up to this many seconds.
        retry_on: Exception types that trigger another attempt.

    Returns:
        The awaited result of the first successful attempt.

    Raises:
        The last exception if all retries are exhausted.
    """
    attempt = 0
    while True:
        try:
            return await func()
        except retry_on as exc:
            attempt += 1
            if attempt > retries:
                raise
            delay = min(base * (2 ** (attempt - 1)), cap) + random.uniform(0, jitter)
            logger.debug("retry: attempt %d failed (%s); sleeping %.2fs", attempt, exc, delay)
            await asyncio.sleep(delay)
