from __future__ import annotations

import logging
import threading
from typing import List, Optional

from ...domain.ports.reachability_probe_port import ReachabilityProbePort, SignalListener

logger = logging.getLogger(__name__)


class HostSignalProbeAdapter(ReachabilityProbePort):
    """Probe fed by the embedding platform's connectivity callbacks.

    Every raw signal is forwarded to listeners, repeated values included.
    """

    supports_events = True

    def __init__(self, initial: Optional[bool] = None):
        self._online = initial
        self._listeners: List[SignalListener] = []
        self._lock = threading.Lock()

    def read(self) -> Optional[bool]:
        return self._online

    def set_online(self, online: bool) -> None:
        with self._lock:
            self._online = bool(online)
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(bool(online))
            except Exception:
                logger.exception("Reachability listener failed")

    def add_listener(self, listener: SignalListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: SignalListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)
