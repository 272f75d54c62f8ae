"""Async retry decorator with exponential backoff."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from functools import wraps
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from catalog_service.infra.metrics.tracking import (
    track_retry_attempt,
    track_retry_exhausted,
    track_retry_success,
)

from .exceptions import RetryError, RetryStatistics
from .strategies import Backoff, retryable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

type RetryHook = Callable[[Exception, int], Awaitable[None] | None]


def retry(
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    retry_if: Callable[[Exception], bool] | None = None,
    stop_after_delay: float | None = None,
    on_retry: RetryHook | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an async callable while it fails with a retryable exception.

    Other exceptions propagate untouched. When ``max_attempts`` calls have
    failed, or ``stop_after_delay`` seconds have passed, RetryError is
    raised from the last failure. ``on_retry(exc, attempt)`` runs before
    each wait and may be a coroutine function.

    Example:
        @retry(max_attempts=2, initial_delay=0.0, exceptions=(IntegrityError,))
        async def reconcile(...): ...
    """
    backoff = Backoff(
        initial=initial_delay, maximum=max_delay, base=exponential_base, jitter=jitter
    )
    should_retry = retryable(exceptions, retry_if)

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        name = func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            stats = RetryStatistics()
            started = time.monotonic()
            attempt = 0

            while True:
                attempt += 1
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    if not should_retry(exc):
                        raise

                    stats.attempts = attempt
                    stats.elapsed = time.monotonic() - started
                    stats.failures.append(type(exc).__name__)
                    out_of_time = stop_after_delay is not None and stats.elapsed >= stop_after_delay
                    if attempt >= max_attempts or out_of_time:
                        track_retry_exhausted(name)
                        logger.error(
                            "Retries exhausted for %s",
                            name,
                            extra={
                                "function": name,
                                "attempts": attempt,
                                "total_delay": stats.total_delay,
                                "last_exception": str(exc),
                            },
                        )
                        raise RetryError(exc, attempt, stats) from exc

                    delay = backoff.delay_after(attempt)
                    stats.total_delay += delay
                    track_retry_attempt(name, attempt + 1)
                    logger.warning(
                        "Retrying %s in %.2fs (attempt %d/%d)",
                        name,
                        delay,
                        attempt,
                        max_attempts,
                        extra={"function": name, "exception": str(exc)},
                    )

                    if on_retry is not None:
                        pending = on_retry(exc, attempt)
                        if inspect.isawaitable(pending):
                            await pending
                    await asyncio.sleep(delay)
                else:
                    if attempt > 1:
                        track_retry_success(name, attempt)
                    return result

        return wrapper

    return decorator
