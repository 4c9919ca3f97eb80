from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, List, Optional

from ...domain.entities.reachability_state import ReachabilityState
from ...domain.ports.reachability_probe_port import ReachabilityProbePort

logger = logging.getLogger(__name__)

Observer = Callable[[ReachabilityState], None]


class ReachabilityMonitor:
    """Best-effort view of network availability.

    Raw signals come from the probe's push events (when it has them) and from
    a coarse fallback poll. Observers hear about transitions only, never about
    a repeat of the last known state.
    """

    def __init__(
        self,
        probe: ReachabilityProbePort,
        *,
        poll_interval_ms: int = 1000,
        fallback_interval_ms: int = 5000,
        wait_timeout_ms: int = 30000,
        reporter=None,
    ):
        self.probe = probe
        self.poll_interval_ms = poll_interval_ms
        self.fallback_interval_ms = fallback_interval_ms
        self.wait_timeout_ms = wait_timeout_ms
        self.reporter = reporter
        self._state = ReachabilityState(online=True)
        self._observers: List[Observer] = []
        self._lock = threading.Lock()
        self._delivery_lock = threading.RLock()
        self._poll_task: Optional[asyncio.Task] = None
        self._listening = False

    @property
    def state(self) -> ReachabilityState:
        return self._state

    @property
    def running(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    def is_online(self) -> bool:
        signal = self.probe.read()
        if signal is None:
            return True
        return bool(signal)

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            self.unsubscribe(observer)

        return unsubscribe

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def observe(self, online: bool) -> bool:
        """Feed one raw signal. Returns True when it was a transition.

        Transitions are delivered one at a time in the order they happened.
        An observer that feeds a new signal cuts the stale delivery short.
        """
        with self._delivery_lock:
            with self._lock:
                if self._state.online == bool(online):
                    return False
                self._state = self._state.transition(bool(online))
                state = self._state
                observers = list(self._observers)

            if self.reporter is not None:
                self.reporter.log_info(
                    f"Network is {'online' if state.online else 'offline'}",
                    {"component": "reachability", "action": "network_transition"},
                )
            for observer in observers:
                if self._state is not state:
                    break
                try:
                    observer(state)
                except Exception as e:
                    self._observer_failed(e)
            return True

    async def check(self) -> bool:
        online = await asyncio.to_thread(self.is_online)
        self.observe(online)
        return online

    async def wait_for_network(self, timeout_ms: Optional[int] = None) -> bool:
        if timeout_ms is None:
            timeout_ms = self.wait_timeout_ms
        if await self.check():
            return True
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000
        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                return False
            await asyncio.sleep(min(self.poll_interval_ms / 1000, remaining))
            if await self.check():
                return True

    def start(self) -> None:
        """Attach to probe events and start the fallback poll.

        Must be called from a running event loop.
        """
        if self.running:
            return
        loop = asyncio.get_running_loop()
        if self.probe.supports_events and not self._listening:
            self.probe.add_listener(self._on_signal)
            self._listening = True
        self._poll_task = loop.create_task(self._poll_forever())

    def stop(self) -> None:
        if self._listening:
            self.probe.remove_listener(self._on_signal)
            self._listening = False
        if self._poll_task is not None:
            self._poll_task.cancel()

    async def aclose(self) -> None:
        task = self._poll_task
        self.stop()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._poll_task = None

    async def __aenter__(self) -> "ReachabilityMonitor":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _on_signal(self, online: bool) -> None:
        self.observe(online)

    async def _poll_forever(self) -> None:
        while True:
            try:
                await self.check()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning("Reachability check failed: %s", e)
            await asyncio.sleep(self.fallback_interval_ms / 1000)

    def _observer_failed(self, exc: Exception) -> None:
        if self.reporter is not None:
            self.reporter.log_warning(
                f"Reachability observer failed: {exc}",
                {"component": "reachability", "action": "notify_observer"},
            )
        else:
            logger.exception("Reachability observer failed")
