from .entities import BinaryBuffer, ErrorContext, ErrorEvent, ReachabilityState, RetryPolicy
from .errors import CapabilityConflictError, InsecureRandomSourceError, UnsupportedOnHostError
from .ports import CapabilityProviderPort, ErrorSinkPort, ReachabilityProbePort, SnapshotWriterPort

__all__ = [
    "BinaryBuffer",
    "ErrorContext",
    "ErrorEvent",
    "ReachabilityState",
    "RetryPolicy",
    "CapabilityConflictError",
    "InsecureRandomSourceError",
    "UnsupportedOnHostError",
    "CapabilityProviderPort",
    "ErrorSinkPort",
    "ReachabilityProbePort",
    "SnapshotWriterPort",
]
