"""Backoff policy for the retry decorator."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Multiplier bounds applied when jitter is on
JITTER_BOUNDS = (0.5, 1.5)


@dataclass(frozen=True, slots=True)
class Backoff:
    """Capped exponential backoff.

    Attempts are numbered from 1; the wait after attempt ``n`` is
    ``initial * base ** (n - 1)``, capped at ``maximum``.

    >>> Backoff(initial=0.5, maximum=3.0, jitter=False).delay_after(3)
    2.0
    >>> Backoff(initial=0.5, maximum=3.0, jitter=False).delay_after(5)
    3.0
    """

    initial: float = 1.0
    maximum: float = 60.0
    base: float = 2.0
    jitter: bool = True

    def delay_after(self, attempt: int) -> float:
        delay = min(self.initial * self.base ** (attempt - 1), self.maximum)
        if self.jitter:
            delay *= random.uniform(*JITTER_BOUNDS)
        return delay


def retryable(
    exceptions: tuple[type[Exception], ...],
    retry_if: Callable[[Exception], bool] | None = None,
) -> Callable[[Exception], bool]:
    """Build the predicate deciding whether a failure is worth another attempt.

    ``retry_if`` wins over the exception types when given.
    """
    if retry_if is not None:
        return retry_if
    return lambda exc: isinstance(exc, exceptions)
