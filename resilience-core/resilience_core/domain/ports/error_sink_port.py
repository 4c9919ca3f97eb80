from __future__ import annotations

from abc import ABC, abstractmethod
from ..entities.error_event import ErrorEvent


class ErrorSinkPort(ABC):
    @abstractmethod
    def emit(self, event: ErrorEvent) -> None:
        raise NotImplementedError
