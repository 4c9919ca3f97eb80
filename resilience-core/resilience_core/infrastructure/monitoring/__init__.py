from .json_snapshot_adapter import JsonSnapshotWriterAdapter
from .logging_sink_adapter import LoggingErrorSinkAdapter

__all__ = ["JsonSnapshotWriterAdapter", "LoggingErrorSinkAdapter"]
