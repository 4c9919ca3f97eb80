from .binary_buffer import BinaryBuffer
from .error_event import ErrorContext, ErrorEvent, ErrorLevel
from .reachability_state import ReachabilityState
from .retry_policy import RetryPolicy

__all__ = [
    "BinaryBuffer",
    "ErrorContext",
    "ErrorEvent",
    "ErrorLevel",
    "ReachabilityState",
    "RetryPolicy",
]
