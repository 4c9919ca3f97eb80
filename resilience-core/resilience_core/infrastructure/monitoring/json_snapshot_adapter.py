from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Sequence

import aiofiles

from ...domain.entities.error_event import ErrorEvent
from ...domain.ports.snapshot_writer_port import SnapshotWriterPort
from ...shared.runtime__shared_util import ensure_directory, utc_now


class JsonSnapshotWriterAdapter(SnapshotWriterPort):
    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)

    def _snapshot_path(self, taken_at: datetime) -> Path:
        return self.output_dir / f"diagnostics_{taken_at.strftime('%Y%m%d_%H%M%S_%f')}.json"

    async def write_snapshot(self, events: Sequence[ErrorEvent]) -> Path:
        ensure_directory(self.output_dir)
        taken_at = utc_now()
        path = self._snapshot_path(taken_at)
        data = {
            "taken_at_utc": taken_at.isoformat(),
            "count": len(events),
            "events": [_event_dict(event) for event in events],
        }
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2, default=str))
        return path


def _event_dict(event: ErrorEvent) -> dict:
    data = event.model_dump()
    data["timestamp"] = event.timestamp.isoformat()
    return data
