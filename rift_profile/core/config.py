"""Configuration settings for the Rift Profile service."""

from __future__ import annotations

from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Riot API Configuration
    riot_api_key: str = Field(
        default="",
        description="Value sent in the X-Riot-Token header on every upstream call",
    )
    riot_region: str = Field(default="americas")
    riot_platform: str = Field(default="na1")
    riot_api_base_domain: str = Field(default="api.riotgames.com")

    # Upstream reliability
    riot_max_concurrent_requests: int = Field(default=20, ge=1)
    riot_max_retries: int = Field(default=2, ge=0)
    riot_retry_delay_seconds: float = Field(default=1.0, ge=0)
    riot_default_retry_after_seconds: float = Field(default=2.0, ge=0)
    riot_request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Aggregation
    profile_match_count: int = Field(default=20, ge=1, le=100)
    profile_mastery_count: int = Field(default=40, ge=1)
    profile_deadline_seconds: float = Field(
        default=30.0,
        ge=0,
        description="Deadline for one profile aggregation; 0 disables it",
    )
    match_window_max_count: int = Field(default=100, ge=1)
    match_window_deadline_seconds: float = Field(
        default=30.0,
        ge=0,
        description="Deadline for one match-window fetch; 0 disables it",
    )

    # Asset resolution
    ddragon_version: str = Field(default="15.20.1")
    asset_request_timeout_seconds: float = Field(default=5.0, gt=0)
    asset_cache_max_entries: int = Field(default=2048, ge=1)

    # Application Configuration
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # CORS Configuration
    cors_origins: str = Field(default="http://localhost:3000,http://127.0.0.1:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [
            origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
        ]

    @field_validator("riot_region", "riot_platform")
    @classmethod
    def normalize_routing(cls, v: str) -> str:
        """Routing values are lowercase host prefixes."""
        return v.strip().lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Reject log levels the logging module does not know about."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix for environment variables
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Create a global settings instance lazily
settings: Settings | None = None


def get_global_settings() -> Settings:
    """Get or create the global settings instance."""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
