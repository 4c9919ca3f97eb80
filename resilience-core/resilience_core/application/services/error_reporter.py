from __future__ import annotations

import asyncio
import sys
import threading
import traceback
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Deque, Generic, List, Mapping, Optional, TypeVar, Union

import requests

from ...domain.entities.error_event import ErrorContext, ErrorEvent, ErrorLevel
from ...domain.ports.error_sink_port import ErrorSinkPort

T = TypeVar("T")

ContextLike = Union[ErrorContext, Mapping[str, Any], None]

DEFAULT_CAPACITY = 100

NETWORK_MESSAGE = "Network connection issue. Please check your internet connection and try again."
BAD_CREDENTIALS_MESSAGE = "Invalid email or password. Please check your credentials and try again."
NO_ACCOUNT_MESSAGE = "No account found with this email address. Please check your email or create a new account."
DUPLICATE_ACCOUNT_MESSAGE = "An account with this email already exists. Please try logging in instead."
ALREADY_EXISTS_MESSAGE = "This information already exists. Please try with different details."
CHECK_INPUT_MESSAGE = "Please check your input and try again."
WALLET_MESSAGE = "Wallet connection failed. Please make sure Phantom wallet is installed and try again."
GENERIC_MESSAGE = "Something went wrong. Please try again or contact support if the problem persists."

# ordered, first match wins
FRIENDLY_MESSAGE_RULES = (
    (("network", "fetch"), NETWORK_MESSAGE),
    (("invalid_credentials", "invalid login"), BAD_CREDENTIALS_MESSAGE),
    (("user_not_found",), NO_ACCOUNT_MESSAGE),
    (("email_already_exists",), DUPLICATE_ACCOUNT_MESSAGE),
    (("duplicate key", "unique constraint"), ALREADY_EXISTS_MESSAGE),
    (("invalid input", "validation"), CHECK_INPUT_MESSAGE),
    (("phantom", "wallet"), WALLET_MESSAGE),
)

_NETWORK_HINTS = ("network", "fetch", "connection", "timeout", "offline")


class ErrorReporter:
    """Process-wide sink for error, warning and info events.

    Events live in a bounded ring buffer, most recent first. No public method
    raises: a fault while recording is dropped after one line on stderr.
    """

    def __init__(
        self,
        sink: ErrorSinkPort,
        *,
        capacity: int = DEFAULT_CAPACITY,
        runtime: Optional[str] = None,
        location: Optional[str] = None,
        reachability=None,
    ):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.sink = sink
        self.capacity = capacity
        self.runtime = runtime
        self.location = location
        self.reachability = reachability
        self._events: Deque[ErrorEvent] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def log_error(self, error: Any, context: ContextLike = None) -> None:
        try:
            message, stack = _describe(error)
            self._record("error", message, context, stack_trace=stack)
        except Exception as e:
            _drop(e)

    def log_warning(self, message: str, context: ContextLike = None) -> None:
        try:
            self._record("warning", str(message), context)
        except Exception as e:
            _drop(e)

    def log_info(self, message: str, context: ContextLike = None) -> None:
        try:
            self._record("info", str(message), context)
        except Exception as e:
            _drop(e)

    def get_recent_errors(self, count: int = 10) -> List[ErrorEvent]:
        try:
            safe_count = max(0, int(count))
            with self._lock:
                return list(self._events)[:safe_count]
        except Exception as e:
            _drop(e)
            return []

    def clear_logs(self) -> None:
        try:
            with self._lock:
                self._events.clear()
        except Exception as e:
            _drop(e)

    def get_user_friendly_message(self, error: Any, context: ContextLike = None) -> str:
        try:
            message, _ = _describe(error, with_stack=False)
            lowered = message.lower()
            for needles, friendly in FRIENDLY_MESSAGE_RULES:
                if any(needle in lowered for needle in needles):
                    return friendly
        except Exception as e:
            _drop(e)
        return GENERIC_MESSAGE

    def _record(self, level: ErrorLevel, message: str, context: ContextLike, *, stack_trace: Optional[str] = None) -> None:
        event = ErrorEvent(
            level=level,
            message=message,
            stack_trace=stack_trace,
            context=ErrorContext.coerce(context),
            runtime=self.runtime,
            location=self.location,
            network_online=self._last_known_online(),
        )
        with self._lock:
            self._events.appendleft(event)
        self.sink.emit(event)

    def _last_known_online(self) -> Optional[bool]:
        if self.reachability is None:
            return None
        return self.reachability.state.online


@dataclass
class OperationOutcome(Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


async def with_error_handling(
    reporter: ErrorReporter,
    operation: Callable[[], Awaitable[T]],
    context: ContextLike = None,
    show_user_error: bool = True,
) -> OperationOutcome[T]:
    try:
        data = await operation()
        return OperationOutcome(success=True, data=data)
    except Exception as e:
        reporter.log_error(e, context)
        user_message = reporter.get_user_friendly_message(e, context) if show_user_error else None
        return OperationOutcome(success=False, error=user_message or _describe(e, with_stack=False)[0])


def handle_async_error(reporter: ErrorReporter, error: Any, context: ContextLike = None) -> str:
    reporter.log_error(error, context)
    return reporter.get_user_friendly_message(error, context)


def is_network_error(error: BaseException) -> bool:
    if isinstance(error, (ConnectionError, TimeoutError, asyncio.TimeoutError)):
        return True
    if isinstance(error, (requests.ConnectionError, requests.Timeout)):
        return True
    message = str(error).lower()
    return any(hint in message for hint in _NETWORK_HINTS)


def _describe(error: Any, with_stack: bool = True) -> tuple[str, Optional[str]]:
    if isinstance(error, BaseException):
        message = str(error) or type(error).__name__
        stack = None
        if with_stack and error.__traceback__ is not None:
            stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return message, stack
    return str(error), None


def _drop(exc: Exception) -> None:
    try:
        sys.stderr.write(f"Fallback Log Error: {exc!r}\n")
    except Exception:
        pass
