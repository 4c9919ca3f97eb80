"""Process-wide capability registration.

Dependent code imports ``random_bytes`` / ``random_fill_sync`` / ``random_fill`` /
``timing_safe_equal`` from here and transparently gets whichever provider the
composition root installed at startup.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from typing import Dict, Optional, Type

from ...domain.errors import CapabilityConflictError
from ...domain.ports.capability_provider_port import CapabilityProviderPort, WritableBuffer
from .constrained_provider import ConstrainedCapabilityProvider
from .native_provider import NativeCapabilityProvider

logger = logging.getLogger(__name__)

PROVIDERS: Dict[str, Type[CapabilityProviderPort]] = {
    NativeCapabilityProvider.host: NativeCapabilityProvider,
    ConstrainedCapabilityProvider.host: ConstrainedCapabilityProvider,
}

_lock = threading.Lock()
_installed: Optional[CapabilityProviderPort] = None


def select_provider(host: str, *, allow_insecure_fallback: bool = False) -> CapabilityProviderPort:
    try:
        provider_cls = PROVIDERS[host]
    except KeyError:
        raise ValueError(f"Unknown capability host {host!r}; expected one of {sorted(PROVIDERS)}") from None
    if provider_cls is ConstrainedCapabilityProvider:
        return ConstrainedCapabilityProvider(allow_insecure_fallback=allow_insecure_fallback)
    return provider_cls()


def install_capabilities(provider: CapabilityProviderPort) -> CapabilityProviderPort:
    global _installed
    with _lock:
        if _installed is None:
            _installed = provider
            logger.info(
                "Capability provider installed: host=%s cryptographic_random=%s",
                provider.host,
                provider.is_cryptographic,
            )
            return provider
        if _installed is provider or _installed.host == provider.host:
            if _installed is not provider and _fallback_flag(_installed) != _fallback_flag(provider):
                logger.warning(
                    "Capability provider for host %s already installed with allow_insecure_fallback=%s; "
                    "ignoring replacement with allow_insecure_fallback=%s",
                    _installed.host,
                    _fallback_flag(_installed),
                    _fallback_flag(provider),
                )
            return _installed
        raise CapabilityConflictError(
            f"Capability provider for host {_installed.host!r} already installed; refusing {provider.host!r}"
        )


def get_capabilities() -> CapabilityProviderPort:
    global _installed
    provider = _installed
    if provider is not None:
        return provider
    with _lock:
        if _installed is None:
            _installed = NativeCapabilityProvider()
            logger.info("No capability provider installed; defaulting to host=native")
        return _installed


def reset_capabilities() -> None:
    global _installed
    with _lock:
        _installed = None


def random_bytes(size: int) -> bytes:
    return get_capabilities().secure_random_bytes(size)


def random_fill_sync(buffer: WritableBuffer, offset: int = 0, size: Optional[int] = None) -> WritableBuffer:
    return get_capabilities().fill_random(buffer, offset, size)


def timing_safe_equal(a, b) -> bool:
    return get_capabilities().constant_time_equals(a, b)


async def random_fill(buffer: WritableBuffer, offset: int = 0, size: Optional[int] = None) -> WritableBuffer:
    """Awaitable ``random_fill_sync``; the read runs off the event loop."""
    return await asyncio.to_thread(random_fill_sync, buffer, offset, size)


def _fallback_flag(provider: CapabilityProviderPort) -> Optional[bool]:
    return getattr(provider, "allow_insecure_fallback", None)
