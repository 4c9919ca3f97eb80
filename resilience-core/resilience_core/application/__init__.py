from .services import ErrorReporter, GlobalFaultObserver, ReachabilityMonitor, RetryExecutor
from .use_cases import ExportDiagnosticsUseCase

__all__ = [
    "ErrorReporter",
    "GlobalFaultObserver",
    "ReachabilityMonitor",
    "RetryExecutor",
    "ExportDiagnosticsUseCase",
]
