from __future__ import annotations

import platform
import random
import string
import time
from datetime import datetime, timezone
from pathlib import Path

_ID_ALPHABET = string.digits + string.ascii_lowercase


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    return utc_now().isoformat()


def new_event_id() -> str:
    # millis prefix + 9 base-36 chars; best-effort uniqueness only
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}{suffix}"


def runtime_fingerprint(client_id: str | None = None) -> str:
    base = f"{platform.python_implementation()}/{platform.python_version()} ({platform.system()} {platform.machine()})"
    if client_id:
        return f"{client_id} {base}"
    return base


def ensure_directory(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
