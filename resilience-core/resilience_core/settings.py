from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_PATH = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_ENV_PATH, env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"

    ERROR_LOG_CAPACITY: int = 100
    RUNTIME_FINGERPRINT: str | None = None
    RUNTIME_LOCATION: str | None = None

    RETRY_MAX: int = 3
    RETRY_BASE_DELAY_MS: float = 1000
    RETRY_MAX_DELAY_MS: float = 10000
    RETRY_BACKOFF_FACTOR: float = 2.0

    NETWORK_POLL_INTERVAL_MS: int = 1000
    NETWORK_FALLBACK_POLL_MS: int = 5000
    NETWORK_WAIT_TIMEOUT_MS: int = 30000
    NETWORK_PROBE_URL: str | None = None
    NETWORK_PROBE_TIMEOUT_S: float = 3.0

    CAPABILITY_HOST: Literal["native", "constrained"] = "native"
    ALLOW_INSECURE_RANDOM_FALLBACK: bool = False

    DIAGNOSTICS_DIR: str = "./diagnostics"


settings = Settings()
