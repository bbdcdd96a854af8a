"""
license_fetch/config/config.py

Purpose
-------
Centralized settings for license-fetch.
- Normalizes environment variable names across legacy and canonical variants.
- Provides safe defaults for the retry schedule and per-attempt timeout.

Notes for Maintainers
---------------------
- Unparseable values fall back to the defaults in ``utils.retry``.
- Out-of-range values are clamped and logged instead of raising, so a bad
  environment never prevents the process from starting.

Examples
--------
# Bash:
export LICENSE_MAX_ATTEMPTS=5
export LICENSE_BASE_DELAY_MS=250
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..utils.retry import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_BASE_DELAY_MS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_REQUEST_TIMEOUT_MS,
)

logger = logging.getLogger(__name__)


# -----------------------------
# Helper functions
# -----------------------------
def _coalesce_env(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty environment variable from *names*."""
    for name in names:
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return val
    return default


def _parse_int(value: Optional[str], *, default: int) -> int:
    if value is None or str(value).strip() == "":
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def _parse_float(value: Optional[str], *, default: float) -> float:
    if value is None or str(value).strip() == "":
        return default
    try:
        return float(str(value).strip())
    except ValueError:
        return default


# -----------------------------
# Main Settings
# -----------------------------
class Settings(BaseSettings):
    # --- Retry schedule ---
    license_max_attempts: int = Field(
        default_factory=lambda: _parse_int(
            _coalesce_env("LICENSE_MAX_ATTEMPTS"), default=DEFAULT_MAX_ATTEMPTS
        )
    )
    license_base_delay_ms: float = Field(
        default_factory=lambda: _parse_float(
            _coalesce_env("LICENSE_BASE_DELAY_MS", "LICENSE_RETRY_DELAY_MS"),
            default=DEFAULT_BASE_DELAY_MS,
        )
    )
    license_backoff_factor: float = Field(
        default_factory=lambda: _parse_float(
            _coalesce_env("LICENSE_BACKOFF_FACTOR"), default=DEFAULT_BACKOFF_FACTOR
        )
    )

    # --- Transport ---
    license_request_timeout_ms: float = Field(
        default_factory=lambda: _parse_float(
            _coalesce_env("LICENSE_REQUEST_TIMEOUT_MS"),
            default=DEFAULT_REQUEST_TIMEOUT_MS,
        )
    )

    # --- Logging ---
    log_level: str = Field(
        default_factory=lambda: (_coalesce_env("LOG_LEVEL") or "INFO").upper()
    )

    class Config:
        case_sensitive = False
        validate_default = True

    # Explanation:
    # BaseSettings also reads LICENSE_* variables by field name. Raw strings
    # are parsed leniently; unparseable values fall back to the default.
    @field_validator("license_max_attempts", mode="before")
    def _coerce_int(cls, v: object) -> object:
        if isinstance(v, str):
            return _parse_int(v, default=DEFAULT_MAX_ATTEMPTS)
        return v

    @field_validator(
        "license_base_delay_ms",
        "license_backoff_factor",
        "license_request_timeout_ms",
        mode="before",
    )
    def _coerce_float(cls, v: object, info) -> object:
        if isinstance(v, str):
            defaults = {
                "license_base_delay_ms": DEFAULT_BASE_DELAY_MS,
                "license_backoff_factor": DEFAULT_BACKOFF_FACTOR,
                "license_request_timeout_ms": DEFAULT_REQUEST_TIMEOUT_MS,
            }
            return _parse_float(v, default=defaults[info.field_name])
        return v

    @field_validator("log_level", mode="before")
    def _normalise_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper() or "INFO"
        return v

    @field_validator("license_max_attempts")
    def _clamp_max_attempts(cls, v: int) -> int:
        if v < 1:
            logger.warning(
                "LICENSE_MAX_ATTEMPTS must be at least 1; received %d. Using 1.", v
            )
            return 1
        return v

    @field_validator("license_base_delay_ms", "license_request_timeout_ms")
    def _clamp_non_negative(cls, v: float, info) -> float:
        if v < 0:
            logger.warning(
                "%s must not be negative; received %s. Using 0.", info.field_name, v
            )
            return 0.0
        return v

    @field_validator("license_backoff_factor")
    def _clamp_backoff_factor(cls, v: float) -> float:
        if v < 1:
            logger.warning(
                "LICENSE_BACKOFF_FACTOR must be at least 1; received %s. Using 1.", v
            )
            return 1.0
        return v


# Singleton settings instance
settings = Settings()
