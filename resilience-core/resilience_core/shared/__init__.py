from .runtime__shared_util import (
    ensure_directory,
    new_event_id,
    now_iso,
    runtime_fingerprint,
    utc_now,
)

__all__ = [
    "ensure_directory",
    "new_event_id",
    "now_iso",
    "runtime_fingerprint",
    "utc_now",
]
