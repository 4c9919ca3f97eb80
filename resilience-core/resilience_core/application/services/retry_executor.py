from __future__ import annotations

import asyncio
import functools
from typing import Awaitable, Callable, Optional, TypeVar

from ...domain.entities.retry_policy import RetryPolicy
from .error_reporter import ErrorReporter

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class RetryExecutor:
    def __init__(self, reporter: Optional[ErrorReporter] = None, *, default_policy: Optional[RetryPolicy] = None, sleep: Sleep = asyncio.sleep):
        self.reporter = reporter
        self.default_policy = default_policy or RetryPolicy()
        self.sleep = sleep

    async def run(self, operation: Callable[[], Awaitable[T]], policy: Optional[RetryPolicy] = None) -> T:
        policy = policy or self.default_policy
        attempt = 0
        while True:
            try:
                return await operation()
            except Exception as e:
                if attempt >= policy.max_retries:
                    raise
                delay_ms = policy.delay_for(attempt)
                await self.sleep(delay_ms / 1000)
                if self.reporter is not None:
                    self.reporter.log_warning(
                        f"Operation failed, retrying in {delay_ms:.0f}ms "
                        f"(attempt {attempt + 1}/{policy.total_attempts})",
                        {"additional_data": {"error": str(e), "attempt": attempt, "delay_ms": delay_ms}},
                    )
                attempt += 1


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: Optional[RetryPolicy] = None,
    *,
    reporter: ErrorReporter,
) -> T:
    return await RetryExecutor(reporter).run(operation, policy)


def retrying(policy: Optional[RetryPolicy] = None, *, reporter: ErrorReporter):
    """Decorate an async function so every call goes through ``with_retry``."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            return await with_retry(lambda: func(*args, **kwargs), policy, reporter=reporter)

        return wrapper

    return decorator
