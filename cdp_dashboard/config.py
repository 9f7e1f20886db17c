"""Runtime settings for the dashboard data engine.

Defaults reproduce the demo dashboard. Each field can be overridden with a
``CDP_DASHBOARD_*`` environment variable via :meth:`DashboardSettings.from_env`.
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from cdp_dashboard.foundation.dimensions import DATE_RANGE_OPTIONS

ENV_PREFIX = "CDP_DASHBOARD_"


class DashboardSettings(BaseModel):
    """Settings shared by the service layer and the CLI."""

    seed_base: int = Field(default=42, description="Base seed for daily series")
    default_range_days: int = Field(
        default=90, description="Date range shown before the user picks one"
    )
    max_range_days: int = Field(
        default=max(DATE_RANGE_OPTIONS),
        gt=0,
        description="Longest date range the service will generate",
    )
    per_conversion_value: float = Field(
        default=150.0, gt=0, description="Modeled revenue per conversion for ROAS"
    )
    cache_size: int = Field(
        default=32, ge=0, description="Series kept in the service cache (0 disables)"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("default_range_days")
    @classmethod
    def _check_range_option(cls, value: int) -> int:
        if value not in DATE_RANGE_OPTIONS:
            raise ValueError(
                f"default_range_days must be one of {DATE_RANGE_OPTIONS}, got {value}"
            )
        return value

    @classmethod
    def from_env(cls) -> DashboardSettings:
        """Build settings from ``CDP_DASHBOARD_*`` environment variables.

        Unset variables keep their defaults; malformed values raise
        ``pydantic.ValidationError``.
        """
        overrides = {}
        for name in cls.model_fields:
            value = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                overrides[name] = value
        return cls.model_validate(overrides)


_SETTINGS: DashboardSettings | None = None


def get_settings() -> DashboardSettings:
    """Return the active settings, loading them from the environment once."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = DashboardSettings.from_env()
    return _SETTINGS


def set_settings(settings: DashboardSettings | None) -> None:
    """Replace the active settings; ``None`` forces a reload from the environment."""
    global _SETTINGS
    _SETTINGS = settings
