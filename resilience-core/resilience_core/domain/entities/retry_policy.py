from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


class RetryPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=3, ge=0)
    base_delay_ms: float = Field(default=1000, ge=0)
    max_delay_ms: float = Field(default=10000, ge=0)
    backoff_factor: float = Field(default=2.0, ge=1.0)

    @property
    def total_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """Backoff before the attempt following ``attempt``, in milliseconds."""
        try:
            delay = self.base_delay_ms * (self.backoff_factor ** attempt)
        except OverflowError:
            return self.max_delay_ms
        if math.isinf(delay) or math.isnan(delay):
            return self.max_delay_ms
        return min(delay, self.max_delay_ms)

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_retries=settings.RETRY_MAX,
            base_delay_ms=settings.RETRY_BASE_DELAY_MS,
            max_delay_ms=settings.RETRY_MAX_DELAY_MS,
            backoff_factor=settings.RETRY_BACKOFF_FACTOR,
        )
