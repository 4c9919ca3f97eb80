from .capabilities import ConstrainedCapabilityProvider, NativeCapabilityProvider
from .monitoring import JsonSnapshotWriterAdapter, LoggingErrorSinkAdapter
from .network import HostSignalProbeAdapter, HttpReachabilityProbeAdapter, NullReachabilityProbeAdapter

__all__ = [
    "ConstrainedCapabilityProvider",
    "NativeCapabilityProvider",
    "JsonSnapshotWriterAdapter",
    "LoggingErrorSinkAdapter",
    "HostSignalProbeAdapter",
    "HttpReachabilityProbeAdapter",
    "NullReachabilityProbeAdapter",
]
