"""Environment-driven settings for the mentor API and its clients."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from mentor_api.errors import ConfigurationError

_LOGGER = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_PORT = 3000
DEFAULT_STORAGE_KEY = "ai-cyber-mentor"


def get_env_bool(name: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on", "enabled"}


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid integer for {name}: {value}") from exc


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the runtime configuration."""

    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_MODEL
    max_output_tokens: int = 1500
    environment: str = "development"
    port: int = DEFAULT_PORT
    static_dir: Optional[str] = None
    serverless: bool = False
    api_base_url: Optional[str] = None
    strict_output: bool = False
    enable_mongodb: bool = False
    mongodb_uri: str = "mongodb://localhost:27017/"
    mongodb_database: str = "cyber_mentor"
    storage_path: Optional[str] = None
    storage_key: str = DEFAULT_STORAGE_KEY

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def load_settings() -> Settings:
    """Read the process environment into a :class:`Settings` instance.

    A missing API key is only logged: the mentor endpoints then fail per call
    instead of preventing start-up.
    """
    api_key = os.getenv("OPENAI_API_KEY") or None
    if not api_key:
        _LOGGER.warning("OPENAI_API_KEY is not set; mentor endpoints will be unavailable")

    base_url = os.getenv("MENTOR_API_BASE_URL")
    if base_url is not None:
        base_url = base_url.strip().rstrip("/")
        if base_url and not base_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Invalid URL format for MENTOR_API_BASE_URL: {base_url}")

    environment = (os.getenv("APP_ENV") or "development").strip().lower()

    return Settings(
        openai_api_key=api_key,
        openai_model=os.getenv("OPENAI_MODEL") or DEFAULT_MODEL,
        max_output_tokens=_get_env_int("MENTOR_MAX_OUTPUT_TOKENS", 1500),
        environment=environment,
        port=_get_env_int("PORT", DEFAULT_PORT),
        static_dir=os.getenv("STATIC_DIR") or None,
        serverless=get_env_bool("SERVERLESS"),
        api_base_url=base_url,
        strict_output=get_env_bool("MENTOR_STRICT_OUTPUT"),
        enable_mongodb=get_env_bool("ENABLE_MONGODB"),
        mongodb_uri=os.getenv("MONGODB_URI", "mongodb://localhost:27017/"),
        mongodb_database=os.getenv("MONGODB_DATABASE", "cyber_mentor"),
        storage_path=os.getenv("MENTOR_STORAGE_PATH") or None,
        storage_key=os.getenv("MENTOR_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
    )
