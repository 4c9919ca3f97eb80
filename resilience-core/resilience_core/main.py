from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .settings import Settings, settings as default_settings
from .domain.entities.retry_policy import RetryPolicy
from .domain.ports.capability_provider_port import CapabilityProviderPort
from .domain.ports.reachability_probe_port import ReachabilityProbePort
from .application.services.error_reporter import ErrorReporter
from .application.services.fault_observer import GlobalFaultObserver
from .application.services.reachability_monitor import ReachabilityMonitor
from .application.services.retry_executor import RetryExecutor
from .application.use_cases.export_diagnostics import ExportDiagnosticsUseCase
from .infrastructure.capabilities.registry import install_capabilities, select_provider
from .infrastructure.monitoring.json_snapshot_adapter import JsonSnapshotWriterAdapter
from .infrastructure.monitoring.logging_sink_adapter import LoggingErrorSinkAdapter
from .infrastructure.network.http_probe_adapter import HttpReachabilityProbeAdapter
from .infrastructure.network.null_probe_adapter import NullReachabilityProbeAdapter
from .shared.runtime__shared_util import runtime_fingerprint

# Relative paths resolve against the repo root (where .env lives).
BASE_DIR = Path(__file__).resolve().parents[2]


@dataclass
class ResilienceRuntime:
    settings: Settings
    reporter: ErrorReporter
    monitor: ReachabilityMonitor
    retry: RetryExecutor
    capabilities: CapabilityProviderPort
    fault_observer: GlobalFaultObserver
    export_diagnostics: ExportDiagnosticsUseCase

    async def shutdown(self) -> None:
        await self.monitor.aclose()
        self.fault_observer.uninstall()


def configure_logging(level: str) -> None:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_probe(cfg: Settings) -> ReachabilityProbePort:
    if cfg.NETWORK_PROBE_URL:
        return HttpReachabilityProbeAdapter(cfg.NETWORK_PROBE_URL, timeout_s=cfg.NETWORK_PROBE_TIMEOUT_S)
    return NullReachabilityProbeAdapter()


def build_runtime(
    cfg: Optional[Settings] = None,
    *,
    probe: Optional[ReachabilityProbePort] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> ResilienceRuntime:
    """Wire the resilience layer once, at process start."""
    cfg = cfg or default_settings
    configure_logging(cfg.LOG_LEVEL)

    capabilities = install_capabilities(
        select_provider(cfg.CAPABILITY_HOST, allow_insecure_fallback=cfg.ALLOW_INSECURE_RANDOM_FALLBACK)
    )

    reporter = ErrorReporter(
        LoggingErrorSinkAdapter(),
        capacity=cfg.ERROR_LOG_CAPACITY,
        runtime=cfg.RUNTIME_FINGERPRINT or runtime_fingerprint(),
        location=cfg.RUNTIME_LOCATION,
    )
    monitor = ReachabilityMonitor(
        probe or build_probe(cfg),
        poll_interval_ms=cfg.NETWORK_POLL_INTERVAL_MS,
        fallback_interval_ms=cfg.NETWORK_FALLBACK_POLL_MS,
        wait_timeout_ms=cfg.NETWORK_WAIT_TIMEOUT_MS,
        reporter=reporter,
    )
    reporter.reachability = monitor

    retry = RetryExecutor(reporter, default_policy=RetryPolicy.from_settings(cfg))

    fault_observer = GlobalFaultObserver(reporter)
    fault_observer.install(loop)

    diagnostics_dir = Path(cfg.DIAGNOSTICS_DIR)
    if not diagnostics_dir.is_absolute():
        diagnostics_dir = BASE_DIR / diagnostics_dir
    export_diagnostics = ExportDiagnosticsUseCase(reporter, JsonSnapshotWriterAdapter(str(diagnostics_dir)))

    return ResilienceRuntime(
        settings=cfg,
        reporter=reporter,
        monitor=monitor,
        retry=retry,
        capabilities=capabilities,
        fault_observer=fault_observer,
        export_diagnostics=export_diagnostics,
    )
