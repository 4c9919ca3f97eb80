from .export_diagnostics import ExportDiagnosticsUseCase

__all__ = ["ExportDiagnosticsUseCase"]
