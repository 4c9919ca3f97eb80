from .capability_provider_port import CapabilityProviderPort, WritableBuffer
from .error_sink_port import ErrorSinkPort
from .reachability_probe_port import ReachabilityProbePort, SignalListener
from .snapshot_writer_port import SnapshotWriterPort

__all__ = [
    "CapabilityProviderPort",
    "ErrorSinkPort",
    "ReachabilityProbePort",
    "SignalListener",
    "SnapshotWriterPort",
    "WritableBuffer",
]
