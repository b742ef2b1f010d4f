"""
Configuration management using Pydantic settings.
Handles verification provider, reference tokens, phone codes, rate limits and image limits.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


SUPPORTED_VERIFICATION_PROVIDERS = ["mock"]


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application configuration
    app_name: str = "Rental Trust"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    testing: bool = False
    log_level: str = "INFO"

    # Verification configuration
    verification_provider: str = "mock"
    verification_delay_seconds: float = 0.5

    # Landlord reference configuration
    reference_token_ttl_days: int = 7
    reference_token_bytes: int = 32
    survey_base_url: str = "http://localhost:3000"

    # Phone verification codes
    phone_code_ttl_seconds: int = 180

    # Rate limiting (requests per window)
    auth_rate_limit: int = 10
    api_rate_limit: int = 60
    rate_limit_window_seconds: int = 60
    rate_limit_sweep_interval_seconds: int = 60

    # Image processing limits
    max_image_size: int = 10 * 1024 * 1024  # 10MB
    max_image_width: int = 4096
    max_image_height: int = 4096
    allowed_image_formats: List[str] = ["jpeg", "jpg", "png", "webp", "gif"]

    # Pagination defaults
    default_page_size: int = 10
    max_page_size: int = 100

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("verification_provider")
    @classmethod
    def validate_verification_provider(cls, v):
        """Only the mock provider ships with this package."""
        provider = v.strip().lower()
        if provider not in SUPPORTED_VERIFICATION_PROVIDERS:
            raise ValueError(
                f"Verification provider must be one of: {SUPPORTED_VERIFICATION_PROVIDERS}"
            )
        return provider

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.strip().upper()
        if level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator(
        "reference_token_ttl_days",
        "reference_token_bytes",
        "rate_limit_window_seconds",
        "phone_code_ttl_seconds"
    )
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Value must be greater than 0")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing" or self.testing

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the process lifecycle.
    """
    return Settings()


# Global settings instance
settings = get_settings()
