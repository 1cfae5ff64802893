"""Env var config loading with pydantic-settings."""

from __future__ import annotations

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger()


class CspSettings(BaseSettings):
    """CSP builder configuration, overridden by ``CSP_*`` env vars."""

    model_config = SettingsConfigDict(
        env_prefix="CSP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "info"
    log_json: bool = True

    # Raise instead of warning when the nonce source reports weak randomness
    strict_nonce: bool = False

    # Start every policy with 'self' on each known directive
    seed_default_self: bool = False

    # Name from presets.yaml applied to every new policy; empty for none
    preset: str = ""

    header_name: str = "Content-Security-Policy"


_settings: CspSettings | None = None


def get_settings() -> CspSettings:
    """Get or create the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def load_settings() -> CspSettings:
    """Load settings from env vars (env vars override model defaults)."""
    global _settings
    _settings = CspSettings()
    logger.info(
        "config_loaded",
        preset=_settings.preset or None,
        strict_nonce=_settings.strict_nonce,
        seed_default_self=_settings.seed_default_self,
    )
    return _settings
