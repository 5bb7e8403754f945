"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values (the Regrid token) should be stored in .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Geocoding (Nominatim)
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    geocode_suffix: str = ", Pennsylvania, USA"
    http_user_agent: str = "HorstSigns-PropertyLookup/1.0"

    # Outbound request settings
    request_timeout_seconds: float = 10.0
    probe_timeout_seconds: float = 5.0

    # County GIS settings
    counties_file: str = "config/counties.json"
    parcel_buffer_degrees: float = 0.00045  # roughly 50 meters

    # Regrid commercial parcel API (token must come from the environment)
    regrid_api_url: str = "https://app.regrid.com/api/v2"
    regrid_api_token: Optional[str] = None
    regrid_covers_pennsylvania: bool = False

    # Fallback policy: "demo" substitutes tagged demo data, "error" fails the request
    parcel_fallback_mode: Literal["demo", "error"] = "demo"
    include_raw_attributes: bool = False

    # API settings
    cors_allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    debug: bool = False

    @field_validator("parcel_fallback_mode", mode="before")
    @classmethod
    def normalize_fallback_mode(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


# Singleton instance
settings = Settings()
