# -*- coding: utf-8 -*-
"""
Retry with exponential backoff for Gemini calls.
Only errors whose message looks like a transient server-side overload are retried;
everything else propagates on the first failure.
"""
import asyncio
import functools
import logging
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_MARKERS = ("500", "503", "INTERNAL", "overloaded", "UNAVAILABLE")
DEFAULT_RETRIES = 5
DEFAULT_BACKOFF = 3.0


def is_retryable(error: BaseException) -> bool:
    msg = str(error) or ""
    return any(marker in msg for marker in RETRYABLE_MARKERS)


async def fetch_with_retry(
    fn: Callable[[], Awaitable[T]],
    retries: int = DEFAULT_RETRIES,
    backoff: float = DEFAULT_BACKOFF,
) -> T:
    while True:
        try:
            return await fn()
        except Exception as e:
            if retries <= 0 or not is_retryable(e):
                raise
            logger.warning(
                "API Error (Retryable), retrying in %.1fs... (%d attempts left). Error: %s",
                backoff, retries, e,
            )
            await asyncio.sleep(backoff)
            retries -= 1
            backoff *= 2


def with_retry(retries: Optional[int] = None, backoff: Optional[float] = None):
    """
    Decorator form of fetch_with_retry for async functions.
    A None argument falls back to the module default.
    """
    def decorator(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs) -> T:
            return await fetch_with_retry(
                lambda: fn(*args, **kwargs),
                retries=DEFAULT_RETRIES if retries is None else retries,
                backoff=DEFAULT_BACKOFF if backoff is None else backoff,
            )
        return wrapper
    return decorator
