from __future__ import annotations

from typing import Optional

from ...domain.ports.reachability_probe_port import ReachabilityProbePort


class NullReachabilityProbeAdapter(ReachabilityProbePort):
    def read(self) -> Optional[bool]:
        return None
