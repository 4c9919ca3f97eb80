from __future__ import annotations

import logging
import os
import random
import threading
from typing import Callable, Optional

from ...domain.errors import InsecureRandomSourceError
from ...domain.ports.capability_provider_port import CapabilityProviderPort

logger = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


class ConstrainedCapabilityProvider(CapabilityProviderPort):
    """Host without native hashing or cipher primitives.

    Randomness comes from ``random_source`` (``os.urandom`` by default). When
    that source is unavailable the provider fails closed with
    ``InsecureRandomSourceError``, unless ``allow_insecure_fallback`` is set,
    in which case it switches to a non-cryptographic PRNG and says so in the
    logs. ``constant_time_equals`` is the base XOR-accumulate comparison.
    """

    host = "constrained"

    def __init__(self, random_source: Optional[RandomSource] = None, *, allow_insecure_fallback: bool = False):
        self._source = random_source or os.urandom
        self.allow_insecure_fallback = allow_insecure_fallback
        self._fallback: Optional[random.Random] = None
        self._lock = threading.Lock()

    @property
    def is_cryptographic(self) -> bool:
        return self._fallback is None

    def secure_random_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be non-negative")
        if self._fallback is None:
            try:
                data = self._source(n)
            except (NotImplementedError, OSError) as e:
                self._enable_fallback(e)
            else:
                if len(data) != n:
                    raise InsecureRandomSourceError(f"random source returned {len(data)} bytes, expected {n}")
                return bytes(data)
        with self._lock:
            return bytes(self._fallback.getrandbits(8) for _ in range(n))

    def _enable_fallback(self, cause: Exception) -> None:
        if not self.allow_insecure_fallback:
            raise InsecureRandomSourceError(
                "No cryptographic random source is available on this host and the "
                "insecure fallback is disabled (ALLOW_INSECURE_RANDOM_FALLBACK=false)"
            ) from cause
        with self._lock:
            if self._fallback is None:
                self._fallback = random.Random()
                logger.warning(
                    "INSECURE RANDOM FALLBACK: cryptographic random source unavailable (%s); "
                    "using non-cryptographic PRNG random.Random",
                    cause,
                )
