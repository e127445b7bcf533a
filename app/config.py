from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class AISettings(BaseModel):
    """Upstream LLM provider settings (AI__PROVIDER, AI__ENDPOINT, ...)."""

    # huggingface | gemini | google | anything else (generic bearer)
    provider: str = ""

    # No endpoint means placeholder-only mode
    endpoint: Optional[str] = None

    # Static credential (optional)
    api_key: Optional[str] = None

    # Accepted for completeness, not used when building requests
    model: Optional[str] = None

    # Applies to the provider call and to service-account token exchange
    timeout_seconds: float = 30.0

    @property
    def provider_name(self) -> str:
        return (self.provider or "").strip().lower()

    @property
    def endpoint_configured(self) -> bool:
        return bool(self.endpoint and self.endpoint.strip())

    @property
    def api_key_present(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # AI provider
    ai: AISettings = Field(default_factory=AISettings)

    # Service-account JSON used for Gemini when no API key is set
    google_application_credentials: Optional[str] = None

    # Sentry error monitoring
    sentry_dsn: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_type: str = "text"  # text | json

    # Environment
    environment: str = "development"

    # API Settings
    api_title: str = "Smart Recipe Generator API"
    api_version: str = "1.0.0"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
