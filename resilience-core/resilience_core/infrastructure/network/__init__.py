from .host_signal_adapter import HostSignalProbeAdapter
from .http_probe_adapter import HttpReachabilityProbeAdapter
from .null_probe_adapter import NullReachabilityProbeAdapter

__all__ = [
    "HostSignalProbeAdapter",
    "HttpReachabilityProbeAdapter",
    "NullReachabilityProbeAdapter",
]
