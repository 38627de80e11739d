"""
Retry policy for generation calls.

Off by default: a policy with max_attempts=1 makes exactly one call and
lets the failure propagate, matching the fail-fast pipeline semantics.
Raising max_attempts enables bounded exponential backoff per call.
"""
import random
from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff configuration."""
    max_attempts: int = 1
    base_delay: float = 1.0          # Delay before the 2nd attempt, seconds
    max_delay: float = 30.0          # Cap on any single delay
    exponential_base: float = 2.0
    jitter: bool = True
    jitter_factor: float = 0.1       # Jitter as fraction of delay

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    @property
    def enabled(self) -> bool:
        return self.max_attempts > 1

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""
        delay = self.base_delay * (self.exponential_base ** (attempt - 1))
        delay = min(delay, self.max_delay)

        if self.jitter:
            jitter_range = delay * self.jitter_factor
            delay = delay + random.uniform(-jitter_range, jitter_range)

        return max(0.0, delay)

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            base_delay=settings.RETRY_BASE_DELAY,
            max_delay=settings.RETRY_MAX_DELAY,
        )


NO_RETRY = RetryPolicy()
