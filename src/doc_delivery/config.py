import os
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_API_URL = "https://sync.api.cloudconvert.com/v2"


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    api_url: str = DEFAULT_API_URL
    timeout_sec: float | None = None
    log_level: str = "INFO"

    def require_api_key(self) -> str:
        key = (self.api_key or "").strip()
        if not key:
            raise ConfigurationError("CLOUDCONVERT_API_KEY not configured")
        return key


def load_settings() -> Settings:
    """Read settings from the process environment.

    Called at conversion time rather than import time so that a credential
    rotated into the environment is picked up without a restart.
    """
    timeout_raw = os.getenv("CLOUDCONVERT_TIMEOUT_SEC", "").strip()
    try:
        timeout_sec = float(timeout_raw) if timeout_raw else None
    except ValueError as e:
        raise ConfigurationError(f"CLOUDCONVERT_TIMEOUT_SEC must be a number, got {timeout_raw!r}") from e
    return Settings(
        api_key=os.getenv("CLOUDCONVERT_API_KEY"),
        api_url=os.getenv("CLOUDCONVERT_API_URL", DEFAULT_API_URL).rstrip("/"),
        timeout_sec=timeout_sec,
        log_level=os.getenv("DOC_DELIVERY_LOG_LEVEL", "INFO").upper(),
    )
