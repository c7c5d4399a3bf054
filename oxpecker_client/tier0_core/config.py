"""
oxpecker_client.tier0_core.config
───────────────────────────────────
Two layers:

- ``ClientSettings``: typed settings read from .env → environment variables
  via pydantic-settings. All env vars are prefixed with OXPECKER_.
- ``Configuration``: the immutable value every API facade is built from
  (base path, default headers, access token). One Configuration can back any
  number of facades; nothing mutates it after construction.

Configure via: OXPECKER_BASE_PATH, OXPECKER_ACCESS_TOKEN, OXPECKER_TIMEOUT,
               OXPECKER_TRANSPORT=httpx|mock, OXPECKER_LOG_LEVEL,
               OXPECKER_LOG_FORMAT, OXPECKER_ENVIRONMENT
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from oxpecker_client.tier0_core.errors import ConfigurationError

DEFAULT_BASE_PATH = "http://localhost:5166"
DEFAULT_USER_AGENT = "oxpecker-client/0.1.0 (python)"


class ClientSettings(BaseSettings):
    """Environment-driven defaults for building a Configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OXPECKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Endpoint ──────────────────────────────────────────────────────────────
    base_path: str = DEFAULT_BASE_PATH
    access_token: SecretStr | None = None
    user_agent: str = DEFAULT_USER_AGENT

    # ── Transport ─────────────────────────────────────────────────────────────
    transport: str = "httpx"
    timeout: float = Field(default=30.0, gt=0)

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = "WARNING"
    log_format: str = "json"

    environment: str = "development"

    @field_validator("environment")
    @classmethod
    def validate_env(cls, v: str) -> str:
        allowed = {"development", "staging", "production", "test"}
        if v.lower() not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        allowed = {"httpx", "mock"}
        if v.lower() not in allowed:
            raise ValueError(f"transport must be one of {allowed}, got {v!r}")
        return v.lower()


@lru_cache(maxsize=1)
def get_settings() -> ClientSettings:
    """
    Return the singleton settings. Cached after first call.
    Call _reset_settings() in tests to pick up new env vars.
    """
    return ClientSettings()


def _reset_settings() -> None:
    """For tests: clear the settings cache."""
    get_settings.cache_clear()


# ── Configuration value ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Configuration:
    """
    Cross-cutting call settings shared by API facades.

    Usage::

        config = Configuration(base_path="http://localhost:5166")
        examples = ExamplesApi(config)
        search = SearchApi(config)
    """

    base_path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    access_token: str | None = field(default=None, repr=False)
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not isinstance(self.base_path, str) or not self.base_path.strip():
            raise ConfigurationError(
                "Configuration.base_path must be a non-empty string.",
                field="base_path",
            )
        object.__setattr__(self, "base_path", self.base_path.rstrip("/"))
        # Read-only copy, detached from the caller's dict.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        **overrides: Any,
    ) -> Configuration:
        """Build a Configuration from ClientSettings (env), with overrides."""
        settings = settings or get_settings()
        token = settings.access_token.get_secret_value() if settings.access_token else None
        values: dict[str, Any] = {
            "base_path": settings.base_path,
            "access_token": token,
            "user_agent": settings.user_agent,
        }
        values.update(overrides)
        return cls(**values)

    def with_headers(self, **headers: str) -> Configuration:
        """Return a new Configuration with extra default headers."""
        return Configuration(
            base_path=self.base_path,
            headers={**self.headers, **headers},
            access_token=self.access_token,
            user_agent=self.user_agent,
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_path}/{path.lstrip('/')}"


__all__ = [
    "ClientSettings",
    "Configuration",
    "get_settings",
    "DEFAULT_BASE_PATH",
]
