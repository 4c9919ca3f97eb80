from __future__ import annotations

from ...domain.ports.snapshot_writer_port import SnapshotWriterPort
from ..services.error_reporter import ErrorReporter


class ExportDiagnosticsUseCase:
    def __init__(self, reporter: ErrorReporter, writer: SnapshotWriterPort):
        self.reporter = reporter
        self.writer = writer

    async def execute(self, count: int = 50) -> dict:
        try:
            events = self.reporter.get_recent_errors(count)
            path = await self.writer.write_snapshot(events)
            return {"status": "success", "path": str(path), "events": len(events)}
        except Exception as e:
            self.reporter.log_error(e, {"action": "export_diagnostics", "component": "diagnostics"})
            raise e
