from .error_reporter import (
    ErrorReporter,
    OperationOutcome,
    handle_async_error,
    is_network_error,
    with_error_handling,
)
from .fault_observer import GlobalFaultObserver
from .reachability_monitor import ReachabilityMonitor
from .retry_executor import RetryExecutor, retrying, with_retry

__all__ = [
    "ErrorReporter",
    "OperationOutcome",
    "handle_async_error",
    "is_network_error",
    "with_error_handling",
    "GlobalFaultObserver",
    "ReachabilityMonitor",
    "RetryExecutor",
    "retrying",
    "with_retry",
]
