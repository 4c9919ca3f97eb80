from __future__ import annotations

import logging
from typing import Optional

import requests

from ...domain.ports.reachability_probe_port import ReachabilityProbePort

logger = logging.getLogger(__name__)


class HttpReachabilityProbeAdapter(ReachabilityProbePort):
    def __init__(self, probe_url: str, timeout_s: float = 3.0, session: requests.Session | None = None):
        self.probe_url = probe_url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def read(self) -> Optional[bool]:
        try:
            self.session.head(self.probe_url, timeout=self.timeout_s, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug("Reachability probe to %s failed: %s", self.probe_url, e)
            return False
        # any HTTP answer, even an error status, means the network path works
        return True
