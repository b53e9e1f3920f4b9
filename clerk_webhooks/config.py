"""
Application Configuration Management

Loads configuration from environment variables (or a local .env file).
Webhook and Supabase credentials are optional at startup: the webhook
endpoint checks them on every request and answers with a 500 when missing.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(default="development", description="Environment name")

    # Application
    app_name: str = Field(default="Clerk Webhooks Sync")
    app_version: str = Field(default="1.0.0")
    log_level: str = Field(default="INFO")

    # FastAPI
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Clerk
    clerk_webhook_secret: Optional[str] = Field(
        default=None, description="Svix signing secret of the Clerk webhook endpoint"
    )
    clerk_verify_signatures: bool = Field(
        default=True,
        description="Verify Svix signatures; disable only behind a verifying gateway",
    )

    # Supabase
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None, description="Supabase service role key"
    )
    supabase_schema: str = Field(default="public")
    supabase_timeout: float = Field(default=30.0, description="Request timeout in seconds")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment"""
        valid_envs = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}")
        return v_lower

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.environment == "development"

    @property
    def has_webhook_secret(self) -> bool:
        return bool(self.clerk_webhook_secret)

    @property
    def has_supabase_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Used as a FastAPI dependency so tests can swap settings through
    ``app.dependency_overrides``.
    """
    return Settings()


# Export singleton instance
settings = get_settings()
