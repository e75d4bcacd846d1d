"""
hostmap_sdk.tier0_core.config
──────────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic; an unknown resolver backend
fails validation when the config is first loaded.

Minimal stack: pydantic-settings
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hostmap_sdk.tier0_core.errors import ConfigurationError


class HostMapConfig(BaseSettings):
    """Typed hostmap configuration. All env vars are prefixed with HOSTMAP_."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Resolution ────────────────────────────────────────────────────────────
    resolver_backend: str = Field(default="socket", alias="HOSTMAP_RESOLVER_BACKEND")
    hosts: str = Field(default="", alias="HOSTMAP_HOSTS")

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="HOSTMAP_LOG_LEVEL")
    log_format: str = Field(default="json", alias="HOSTMAP_LOG_FORMAT")

    # ── Metrics ───────────────────────────────────────────────────────────────
    service_name: str = Field(default="hostmap", alias="HOSTMAP_SERVICE_NAME")
    metrics_port: int = Field(default=8001, alias="HOSTMAP_METRICS_PORT")

    @field_validator("resolver_backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        allowed = {"socket", "explicit"}
        if v.lower() not in allowed:
            raise ValueError(f"resolver_backend must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()

    @property
    def static_hosts(self) -> list[tuple[str, str]]:
        """
        Parse HOSTMAP_HOSTS ("name=ip,name=ip") into (hostname, ip) pairs,
        preserving order. Raises ConfigurationError on an entry without "=".
        """
        pairs: list[tuple[str, str]] = []
        for item in self.hosts.split(","):
            item = item.strip()
            if not item:
                continue
            hostname, sep, ip = item.partition("=")
            if not sep or not hostname.strip():
                raise ConfigurationError(
                    "invalid_static_host",
                    f"HOSTMAP_HOSTS entry {item!r} is not of the form name=ip.",
                )
            pairs.append((hostname.strip(), ip.strip()))
        return pairs


@lru_cache(maxsize=1)
def get_config() -> HostMapConfig:
    """
    Return the singleton hostmap config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    Raises ConfigurationError (not Pydantic's ValidationError) on bad values.
    """
    try:
        return HostMapConfig()
    except PydanticValidationError as exc:
        fields = ", ".join(
            ".".join(str(loc) for loc in err["loc"]) for err in exc.errors()
        )
        raise ConfigurationError(
            "invalid_configuration",
            f"Invalid hostmap configuration: {fields}",
        ) from exc


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = ["HostMapConfig", "get_config"]
