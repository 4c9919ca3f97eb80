from .constrained_provider import ConstrainedCapabilityProvider
from .native_provider import NativeCapabilityProvider
from .registry import (
    get_capabilities,
    install_capabilities,
    random_bytes,
    random_fill,
    random_fill_sync,
    reset_capabilities,
    select_provider,
    timing_safe_equal,
)

__all__ = [
    "ConstrainedCapabilityProvider",
    "NativeCapabilityProvider",
    "get_capabilities",
    "install_capabilities",
    "random_bytes",
    "random_fill",
    "random_fill_sync",
    "reset_capabilities",
    "select_provider",
    "timing_safe_equal",
]
