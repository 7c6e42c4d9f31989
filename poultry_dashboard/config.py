"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Farm
    farm_timezone: str = Field(
        default="Asia/Karachi",
        description="IANA timezone that defines the farm's calendar day"
    )
    opening_cash_balance: float = Field(
        default=50000.0,
        description="Cash balance before the first recorded transaction"
    )
    trend_window_days: int = Field(
        default=7,
        description="Number of days shown in dashboard trend series"
    )
    max_trend_window_days: int = Field(
        default=90,
        description="Largest trend window a client may request"
    )
    reject_unknown_flocks: bool = Field(
        default=True,
        description="Reject reports naming an unregistered flock instead of storing them unmatched"
    )
    seed_on_startup: bool = Field(
        default=True,
        description="Load the startup dataset when the application starts"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Whether per-client rate limiting is applied"
    )
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Poultry Farm Dashboard",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
