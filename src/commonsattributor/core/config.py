from __future__ import annotations

import os
from dataclasses import dataclass

from commonsattributor.core.errors import ConfigurationError

VERSION = "0.3.0"

DEFAULT_API_ENDPOINT = "https://commons.wikimedia.org/w/api.php"
DEFAULT_THUMBNAIL_WIDTH = 300
MAX_THUMBNAIL_WIDTH = 1280
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = (
    f"commons-attributor/{VERSION} (https://github.com/commons-attributor/commons-attributor)"
)


@dataclass(frozen=True)
class AppConfig:
    api_endpoint: str = DEFAULT_API_ENDPOINT
    thumbnail_width: int = DEFAULT_THUMBNAIL_WIDTH
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def load_config() -> AppConfig:
    api_endpoint = (os.getenv("ATTRIBUTOR_API_ENDPOINT") or DEFAULT_API_ENDPOINT).strip()
    if not api_endpoint.startswith(("http://", "https://")):
        raise ConfigurationError(f"ATTRIBUTOR_API_ENDPOINT must be an http(s) URL, got {api_endpoint!r}")

    thumbnail_width = _env_int("ATTRIBUTOR_THUMBNAIL_WIDTH", DEFAULT_THUMBNAIL_WIDTH)
    if not 1 <= thumbnail_width <= MAX_THUMBNAIL_WIDTH:
        raise ConfigurationError(
            f"ATTRIBUTOR_THUMBNAIL_WIDTH must be between 1 and {MAX_THUMBNAIL_WIDTH}, got {thumbnail_width}"
        )

    timeout_seconds = _env_float("ATTRIBUTOR_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    if timeout_seconds <= 0:
        raise ConfigurationError(f"ATTRIBUTOR_TIMEOUT_SECONDS must be positive, got {timeout_seconds}")

    user_agent = (os.getenv("ATTRIBUTOR_USER_AGENT") or DEFAULT_USER_AGENT).strip()

    return AppConfig(
        api_endpoint=api_endpoint,
        thumbnail_width=thumbnail_width,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )
