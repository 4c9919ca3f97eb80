from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from ..entities.error_event import ErrorEvent


class SnapshotWriterPort(ABC):
    @abstractmethod
    async def write_snapshot(self, events: Sequence[ErrorEvent]) -> Path:
        raise NotImplementedError
