from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

SignalListener = Callable[[bool], None]


class ReachabilityProbePort(ABC):
    supports_events: bool = False

    @abstractmethod
    def read(self) -> Optional[bool]:
        """Current host signal, or None when the host exposes none."""
        raise NotImplementedError

    def add_listener(self, listener: SignalListener) -> None:
        return None

    def remove_listener(self, listener: SignalListener) -> None:
        return None
