"""Client settings using Pydantic Settings for configuration management."""

from functools import lru_cache

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from SENDGRID_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SENDGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    app_name: str = "sgmail"
    app_version: str = "0.1.0"

    # Credentials
    api_key: SecretStr | None = None

    # Endpoint
    api_url: str = "https://api.sendgrid.com/api/mail.send.json"
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Wire format
    include_from_name: bool = False

    # Logging
    log_level: str = "INFO"

    @computed_field
    @property
    def user_agent(self) -> str:
        """User-Agent sent with every request."""
        return f"{self.app_name}/{self.app_version}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
