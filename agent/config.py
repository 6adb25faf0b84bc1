# File: agent/config.py
# Settings for the reaction pipeline, read from the environment (load .env first via python-dotenv).

import os
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_ANALYSIS_API_URL = "http://localhost:5000/analyze"


def _env_float(key: str) -> Optional[float]:
    v = os.environ.get(key, "").strip()
    if not v:
        return None
    try:
        return float(v)
    except ValueError:
        raise RuntimeError(f"{key} must be a number, got {v!r}")


def _env_int(key: str, default: int) -> int:
    v = os.environ.get(key, "").strip()
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        raise RuntimeError(f"{key} must be an integer, got {v!r}")


@dataclass(frozen=True)
class Settings:
    analysis_api_url: str = DEFAULT_ANALYSIS_API_URL
    analysis_timeout_seconds: Optional[float] = None  # None = wait as long as the backend takes
    history_limit: int = 4
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        url = os.environ.get("ANALYSIS_API_URL", "").strip() or DEFAULT_ANALYSIS_API_URL
        timeout = _env_float("ANALYSIS_TIMEOUT_SECONDS")
        history_limit = _env_int("HISTORY_LIMIT", 4)
        log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

        if timeout is not None and timeout <= 0:
            raise RuntimeError("ANALYSIS_TIMEOUT_SECONDS must be positive")
        if history_limit < 1:
            raise RuntimeError("HISTORY_LIMIT must be at least 1")

        return Settings(
            analysis_api_url=url,
            analysis_timeout_seconds=timeout,
            history_limit=history_limit,
            log_level=log_level,
        )


def load_settings() -> Tuple[Settings, Optional[str]]:
    """Settings from the environment, or the defaults plus the error text when they are invalid."""
    try:
        return Settings.from_env(), None
    except RuntimeError as e:
        return Settings(), str(e)
