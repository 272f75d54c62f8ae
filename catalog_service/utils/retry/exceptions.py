"""Retry failure type."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RetryStatistics:
    """What happened across the attempts of one call."""

    attempts: int = 0
    total_delay: float = 0.0
    elapsed: float = 0.0
    failures: list[str] = field(default_factory=list)


class RetryError(Exception):
    """Raised once a call has used up its attempts.

    The last failure is kept as ``last_exception`` and chained as
    ``__cause__``.
    """

    def __init__(
        self,
        last_exception: Exception,
        attempts: int,
        statistics: RetryStatistics | None = None,
    ) -> None:
        self.last_exception = last_exception
        self.attempts = attempts
        self.statistics = statistics or RetryStatistics(attempts=attempts)
        super().__init__(f"Failed after {attempts} attempts. Last error: {last_exception}")
